"""
Scoring service client components.
"""

from .session_manager import Session, SessionManager
from .scoring_client import ClientConfig, ScoringClient

__all__ = ["Session", "SessionManager", "ClientConfig", "ScoringClient"]
