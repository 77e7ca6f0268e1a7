"""
HTTP client for the remote fraud scoring service.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ..exceptions import AuthError, ScoringError
from ..models.fraud_score import ScoreResult
from ..models.transaction import ScoringTransaction
from .session_manager import SessionManager

TRANSACTIONS_PATH = "/api/transactions"


@dataclass
class ClientConfig:
    """Connection settings for the scoring service."""

    api_base_url: str
    username: str
    password: str
    timeout_seconds: float = 5.0
    token_ttl_seconds: float = 3600
    verify_ssl: bool = True


class ScoringClient:
    """Send one transaction to the scoring service and return its score.

    Exactly one scoring request is made per call, preceded by at most one
    login. Every failure surfaces as ScoringError.
    """

    def __init__(
        self,
        config: ClientConfig,
        http: Optional[requests.Session] = None,
        session_manager: Optional[SessionManager] = None,
    ):
        self.config = config
        self.base_url = config.api_base_url.rstrip("/")
        self.logger = logging.getLogger(__name__)

        self.http = http or requests.Session()
        self.http.verify = config.verify_ssl
        self.session_manager = session_manager or SessionManager(
            self.http,
            self.base_url,
            config.username,
            config.password,
            token_ttl_seconds=config.token_ttl_seconds,
            timeout=config.timeout_seconds,
        )

    def check_transaction(self, transaction: ScoringTransaction) -> ScoreResult:
        try:
            token = self.session_manager.get_valid_token()
        except AuthError as e:
            raise ScoringError(f"Could not authenticate with scoring service: {e}", cause=e) from e

        url = f"{self.base_url}{TRANSACTIONS_PATH}"
        try:
            response = self.http.post(
                url,
                json=transaction.to_payload(),
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.config.timeout_seconds,
            )
        except requests.Timeout as e:
            raise ScoringError(f"Scoring request timed out: {e}", cause=e) from e
        except requests.RequestException as e:
            raise ScoringError(f"Error calling scoring service: {e}", cause=e) from e

        if not response.ok:
            error = requests.HTTPError(
                f"HTTP {response.status_code} from {url}", response=response
            )
            raise ScoringError(
                f"Scoring service returned HTTP {response.status_code}", cause=error
            )

        try:
            result = ScoreResult.from_response(response.json())
        except ValueError as e:
            raise ScoringError(f"Malformed scoring response: {e}", cause=e) from e

        self.logger.debug(f"Scoring service returned risk score {result.risk_score}")
        return result

    def close(self):
        """Close the underlying HTTP session."""
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
