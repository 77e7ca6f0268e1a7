"""
Pre-transaction fraud check orchestrating the scoring pipeline.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Any, Optional
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..alerting.review_notifier import ReviewNotifier
from ..alerting.review_queue import ReviewQueue
from ..client.scoring_client import ClientConfig, ScoringClient
from ..exceptions import ScoringError
from ..models.fraud_score import Decision, Outcome
from ..models.transaction import TransactionRequest
from .decision_engine import DecisionEngine, DecisionPolicy
from .transformer import TransactionTransformer


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FraudCheckProcessor:
    """Evaluate host transactions against the remote scoring service.

    transform -> score -> decide -> (review, when flagged). Each call to
    `evaluate` is independent; the scoring client's session cache is the
    only state shared between concurrent evaluations.
    """

    def __init__(
        self,
        scoring_client: ScoringClient,
        decision_engine: DecisionEngine,
        transformer: Optional[TransactionTransformer] = None,
        max_workers: int = 4,
    ):
        self.scoring_client = scoring_client
        self.decision_engine = decision_engine
        self.transformer = transformer or TransactionTransformer()
        self.max_workers = max_workers
        self.logger = logging.getLogger(__name__)

        # Metrics
        self._metrics_lock = threading.Lock()
        self.metrics = {
            "transactions_evaluated": 0,
            "approved": 0,
            "flagged": 0,
            "rejected": 0,
            "scoring_errors": 0,
            "fail_open_approvals": 0,
            "evaluation_errors": 0,
            "start_time": _utcnow(),
            "last_evaluated_time": None,
        }

    @classmethod
    def from_config(
        cls,
        client_config: ClientConfig,
        policy: DecisionPolicy,
        review_queue: ReviewQueue,
        country_prefix: str = "NG",
        max_workers: int = 4,
    ) -> "FraudCheckProcessor":
        notifier = ReviewNotifier(review_queue)
        return cls(
            scoring_client=ScoringClient(client_config),
            decision_engine=DecisionEngine(policy, review_notifier=notifier),
            transformer=TransactionTransformer(country_prefix),
            max_workers=max_workers,
        )

    def evaluate(self, request: TransactionRequest) -> Outcome:
        """Run one transaction through the fraud check."""
        scoring_txn = self.transformer.transform(request)

        try:
            result = self.scoring_client.check_transaction(scoring_txn)
        except ScoringError as e:
            self.logger.error(
                f"Scoring failed for transaction {request.transaction_id}: {e}"
            )
            outcome = self.decision_engine.decide(request, e)
            self._record(outcome, scoring_failed=True)
            return outcome

        outcome = self.decision_engine.decide(request, result)
        self._record(outcome)

        self.logger.info(
            f"Transaction {request.transaction_id} evaluated: "
            f"risk score {result.risk_score}, decision {outcome.decision.value}"
        )
        return outcome

    def evaluate_batch(
        self, requests: List[TransactionRequest]
    ) -> List[Optional[Outcome]]:
        """Evaluate independent transactions in parallel.

        Outcomes are returned in input order, so repeated transaction IDs each
        keep their own result. A transaction whose evaluation crashes gets
        None and is counted as an evaluation error.
        """
        outcomes: List[Optional[Outcome]] = [None] * len(requests)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self.evaluate, request): index
                for index, request in enumerate(requests)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                request = requests[index]
                try:
                    outcomes[index] = future.result()
                except Exception as e:
                    self.logger.error(
                        f"Error evaluating transaction {request.transaction_id}: {e}"
                    )
                    with self._metrics_lock:
                        self.metrics["evaluation_errors"] += 1

        return outcomes

    def _record(self, outcome: Outcome, scoring_failed: bool = False):
        with self._metrics_lock:
            self.metrics["transactions_evaluated"] += 1
            self.metrics["last_evaluated_time"] = _utcnow()

            if scoring_failed:
                self.metrics["scoring_errors"] += 1
                if outcome.is_approved:
                    self.metrics["fail_open_approvals"] += 1

            if outcome.decision == Decision.APPROVED:
                self.metrics["approved"] += 1
            elif outcome.decision == Decision.APPROVED_WITH_FLAG:
                self.metrics["flagged"] += 1
            else:
                self.metrics["rejected"] += 1

    def get_metrics(self) -> Dict[str, Any]:
        """Get evaluation metrics."""
        with self._metrics_lock:
            metrics = dict(self.metrics)

        uptime = (_utcnow() - metrics["start_time"]).total_seconds()
        notifier = self.decision_engine.review_notifier

        return {
            **metrics,
            "uptime_seconds": uptime,
            "scoring_error_rate": metrics["scoring_errors"]
            / max(1, metrics["transactions_evaluated"]),
            "review_failures": notifier.counters["queue_failures"] if notifier else 0,
            "logins": self.scoring_client.session_manager.login_count,
        }

    def health_check(self) -> Dict[str, Any]:
        """Report component status without calling the remote service."""
        session = self.scoring_client.session_manager.session
        health_status = {
            "status": "healthy",
            "components": {
                "scoring_client": "healthy",
                "decision_engine": "healthy",
                "session": "active"
                if session is not None and session.is_valid(_utcnow())
                else "expired",
                "review_notifier": "configured"
                if self.decision_engine.review_notifier
                else "not_configured",
            },
            "fail_open": self.decision_engine.policy.fail_open,
            "timestamp": _utcnow().isoformat(),
        }

        if self.get_metrics()["scoring_error_rate"] > 0.5:
            health_status["status"] = "degraded"

        return health_status

    def close(self):
        self.scoring_client.close()
