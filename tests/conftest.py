"""
Test configuration and fixtures for the fraud check pipeline tests.
"""
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest
import requests

from fraudguard.client.scoring_client import ClientConfig
from fraudguard.models.transaction import TransactionRequest


BASE_URL = "https://fraud.test"
LOGIN_URL = f"{BASE_URL}/api/auths/login"
TRANSACTIONS_URL = f"{BASE_URL}/api/transactions"


class FakeClock:
    """Controllable UTC clock."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now = self.now + timedelta(seconds=seconds)


def make_response(status_code: int = 200, body: Any = None, invalid_json: bool = False):
    """Build a stand-in for requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if invalid_json:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1")
    else:
        response.json.return_value = body
    return response


class FakeScoringService:
    """Routes POSTs on a mocked requests.Session to login/scoring handlers."""

    def __init__(self, token: str = "token-1", risk_score: int = 10, reason: Optional[str] = None):
        self.token = token
        self.login_response = None
        self.scoring_response = None
        self.login_error: Optional[Exception] = None
        self.scoring_error: Optional[Exception] = None
        self.login_delay = 0.0
        self.risk_score = risk_score
        self.reason = reason

        self.login_calls = 0
        self.scoring_calls = 0
        self.scoring_payloads = []
        self.scoring_headers = []
        self.timeouts = []
        self._lock = threading.Lock()

        self.http = MagicMock(spec=requests.Session)
        self.http.post.side_effect = self._post

    def _post(self, url, json=None, headers=None, timeout=None):
        self.timeouts.append(timeout)
        if url == LOGIN_URL:
            with self._lock:
                self.login_calls += 1
            if self.login_delay:
                time.sleep(self.login_delay)
            if self.login_error is not None:
                raise self.login_error
            return self.login_response or make_response(200, {"token": self.token})

        if url == TRANSACTIONS_URL:
            with self._lock:
                self.scoring_calls += 1
                self.scoring_payloads.append(json)
                self.scoring_headers.append(headers)
            if self.scoring_error is not None:
                raise self.scoring_error
            body: Dict[str, Any] = {"riskScore": self.risk_score}
            if self.reason is not None:
                body["reason"] = self.reason
            return self.scoring_response or make_response(200, body)

        raise AssertionError(f"Unexpected URL: {url}")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scoring_service() -> FakeScoringService:
    return FakeScoringService()


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(
        api_base_url=BASE_URL,
        username="svc-finacle",
        password="s3cret",
        timeout_seconds=5.0,
        token_ttl_seconds=3600,
    )


@pytest.fixture
def sample_request() -> TransactionRequest:
    """Sample host transaction for testing."""
    return TransactionRequest(
        transaction_id="TXN-0001",
        debit_account="0123456789",
        credit_account="9876543210",
        amount=1000.0,
        transaction_code="FT",
        channel_type="MOBILE",
        branch_code=None,
        geo_location="6.5244,3.3792",
        device_info="iPhone14",
        client_ip_address="102.89.1.10",
        transaction_date=datetime(2024, 1, 1, 9, 30, 0, tzinfo=timezone.utc),
    )
