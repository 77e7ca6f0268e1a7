"""
Score and outcome models for the fraud check pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Any


class RiskLevel(Enum):
    """Risk tier derived from a risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Decision(Enum):
    """Decision carried by an Outcome."""

    APPROVED = "approved"
    APPROVED_WITH_FLAG = "approved_with_flag"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ScoreResult:
    """Risk score returned by the scoring service."""

    risk_score: int
    reason: Optional[str] = None

    @classmethod
    def from_response(cls, data: Any) -> "ScoreResult":
        """Parse a `{riskScore, reason?}` response body.

        Raises ValueError when the body is not an object, the score is
        missing or not an integer, or the reason is not a string.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")

        risk_score = data.get("riskScore")
        # bool is an int subclass
        if isinstance(risk_score, bool) or not isinstance(risk_score, int):
            raise ValueError(f"Invalid riskScore in response: {risk_score!r}")

        reason = data.get("reason")
        if reason is not None and not isinstance(reason, str):
            raise ValueError(f"Invalid reason in response: {reason!r}")

        return cls(risk_score=risk_score, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        return {"risk_score": self.risk_score, "reason": self.reason}


@dataclass(frozen=True)
class Outcome:
    """Terminal result of a fraud check.

    Use the `approved`, `flagged` and `rejected` constructors; a rejected or
    flagged outcome always carries a reason.
    """

    decision: Decision
    reason: Optional[str] = None
    risk_score: Optional[int] = None

    @classmethod
    def approved(cls, risk_score: Optional[int] = None) -> "Outcome":
        return cls(Decision.APPROVED, None, risk_score)

    @classmethod
    def flagged(cls, reason: str, risk_score: Optional[int] = None) -> "Outcome":
        return cls(Decision.APPROVED_WITH_FLAG, reason, risk_score)

    @classmethod
    def rejected(cls, reason: str, risk_score: Optional[int] = None) -> "Outcome":
        return cls(Decision.REJECTED, reason, risk_score)

    @property
    def is_approved(self) -> bool:
        """True for both approved variants."""
        return self.decision != Decision.REJECTED

    @property
    def is_flagged(self) -> bool:
        return self.decision == Decision.APPROVED_WITH_FLAG

    @property
    def is_rejected(self) -> bool:
        return self.decision == Decision.REJECTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "decision": self.decision.value,
            "reason": self.reason,
            "risk_score": self.risk_score,
        }
