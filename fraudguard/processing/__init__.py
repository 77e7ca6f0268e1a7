"""
Processing components for the fraud check pipeline.
"""

from .transformer import TransactionTransformer
from .decision_engine import DecisionEngine, DecisionPolicy
from .transaction_processor import FraudCheckProcessor

__all__ = [
    "TransactionTransformer",
    "DecisionEngine",
    "DecisionPolicy",
    "FraudCheckProcessor",
]
