"""
Pre-transaction fraud check against a remote risk scoring service.
"""

from .exceptions import FraudCheckError, AuthError, ScoringError
from .models import (
    TransactionRequest,
    ScoringTransaction,
    TransactionType,
    ScoreResult,
    RiskLevel,
    Decision,
    Outcome,
)
from .client import ClientConfig, ScoringClient, SessionManager
from .processing import (
    TransactionTransformer,
    DecisionEngine,
    DecisionPolicy,
    FraudCheckProcessor,
)
from .alerting import ReviewLogEntry, ReviewNotifier, create_review_queue

__version__ = "1.0.0"

__all__ = [
    "FraudCheckError",
    "AuthError",
    "ScoringError",
    "TransactionRequest",
    "ScoringTransaction",
    "TransactionType",
    "ScoreResult",
    "RiskLevel",
    "Decision",
    "Outcome",
    "ClientConfig",
    "ScoringClient",
    "SessionManager",
    "TransactionTransformer",
    "DecisionEngine",
    "DecisionPolicy",
    "FraudCheckProcessor",
    "ReviewLogEntry",
    "ReviewNotifier",
    "create_review_queue",
]
