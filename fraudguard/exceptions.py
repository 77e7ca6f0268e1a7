"""
Exceptions raised by the fraud check pipeline.
"""

from typing import Optional


class FraudCheckError(Exception):
    """Base class for fraud check failures."""


class AuthError(FraudCheckError):
    """Login against the scoring service failed."""


class ScoringError(FraudCheckError):
    """Scoring call failed; `cause` holds the underlying error when known."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    @property
    def is_auth_failure(self) -> bool:
        return isinstance(self.cause, AuthError)
