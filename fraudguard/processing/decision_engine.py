"""
Risk-tier decision policy for scored transactions.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..alerting.review_notifier import ReviewNotifier
from ..exceptions import ScoringError
from ..models.fraud_score import Outcome, RiskLevel, ScoreResult
from ..models.transaction import TransactionRequest

UNVERIFIED_REASON = "Unable to verify transaction. Please try again later."


@dataclass(frozen=True)
class DecisionPolicy:
    """Thresholds and error policy for the decision engine.

    `high_threshold` and `medium_threshold` are inclusive lower bounds of
    their tiers.
    """

    high_threshold: int = 80
    medium_threshold: int = 50
    fail_open: bool = False

    def __post_init__(self):
        if not 0 <= self.medium_threshold <= self.high_threshold <= 100:
            raise ValueError(
                "Risk thresholds must satisfy 0 <= medium <= high <= 100, got "
                f"medium={self.medium_threshold}, high={self.high_threshold}"
            )


class DecisionEngine:
    """Turn a score, or a scoring failure, into an Outcome."""

    def __init__(
        self,
        policy: Optional[DecisionPolicy] = None,
        review_notifier: Optional[ReviewNotifier] = None,
    ):
        self.policy = policy or DecisionPolicy()
        self.review_notifier = review_notifier
        self.logger = logging.getLogger(__name__)

    def classify(self, risk_score: int) -> RiskLevel:
        if risk_score >= self.policy.high_threshold:
            return RiskLevel.HIGH
        if risk_score >= self.policy.medium_threshold:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def decide(
        self,
        request: TransactionRequest,
        result: Union[ScoreResult, ScoringError],
        fail_open: Optional[bool] = None,
    ) -> Outcome:
        if fail_open is None:
            fail_open = self.policy.fail_open

        if isinstance(result, ScoringError):
            return self._decide_on_error(request, result, fail_open)

        score = result.risk_score
        level = self.classify(score)

        if level == RiskLevel.HIGH:
            self.logger.info(
                f"Rejecting transaction {request.transaction_id}: risk score {score}"
            )
            return Outcome.rejected(
                "Transaction rejected due to high fraud risk. "
                f"Risk Score: {score}. Please contact customer support.",
                risk_score=score,
            )

        if level == RiskLevel.MEDIUM:
            reason = f"Medium risk transaction. Risk Score: {score}"
            request.set_review_flag(True, reason)
            self.logger.info(
                f"Flagging transaction {request.transaction_id} for review: risk score {score}"
            )
            if self.review_notifier is not None:
                self.review_notifier.notify(request, result)
            return Outcome.flagged(reason, risk_score=score)

        return Outcome.approved(risk_score=score)

    def _decide_on_error(
        self, request: TransactionRequest, error: ScoringError, fail_open: bool
    ) -> Outcome:
        if fail_open:
            self.logger.warning(
                "Fraud detection API error, allowing transaction "
                f"{request.transaction_id}: {error}"
            )
            return Outcome.approved()

        self.logger.error(
            "Fraud detection API error, blocking transaction "
            f"{request.transaction_id}: {error}"
        )
        return Outcome.rejected(UNVERIFIED_REASON)
