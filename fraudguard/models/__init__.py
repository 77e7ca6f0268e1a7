"""
Data models for the fraud check pipeline.
"""

from .transaction import TransactionRequest, ScoringTransaction, TransactionType
from .fraud_score import ScoreResult, RiskLevel, Decision, Outcome

__all__ = [
    "TransactionRequest",
    "ScoringTransaction",
    "TransactionType",
    "ScoreResult",
    "RiskLevel",
    "Decision",
    "Outcome",
]
