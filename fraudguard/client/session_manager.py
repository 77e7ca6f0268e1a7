"""
Session token cache for the remote scoring service.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import requests

from ..exceptions import AuthError

LOGIN_PATH = "/api/auths/login"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Session:
    """Bearer token and the instant it stops being usable."""

    token: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at


class SessionManager:
    """Hand out a valid bearer token, logging in only when needed.

    One instance is shared by every evaluation running against the same
    scoring service. The refresh path is serialized: callers that arrive
    while a login is in flight wait on the lock and then reuse the new
    session instead of logging in again.
    """

    def __init__(
        self,
        http: requests.Session,
        base_url: str,
        username: str,
        password: str,
        token_ttl_seconds: float = 3600,
        timeout: float = 5.0,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.token_ttl = timedelta(seconds=token_ttl_seconds)
        self.timeout = timeout
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        self._session: Optional[Session] = None
        self._lock = threading.Lock()

        self.login_count = 0

    def get_valid_token(self) -> str:
        """Return a cached token, or log in and cache a fresh one."""
        session = self._session
        if session is not None and session.is_valid(self.clock()):
            self.logger.debug("Using cached scoring service token")
            return session.token

        with self._lock:
            # Another caller may have refreshed while we waited
            session = self._session
            if session is not None and session.is_valid(self.clock()):
                return session.token

            self._session = self._login()
            return self._session.token

    def invalidate(self):
        """Drop the cached session so the next call logs in again."""
        with self._lock:
            self._session = None

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def _login(self) -> Session:
        url = f"{self.base_url}{LOGIN_PATH}"
        self.login_count += 1
        self.logger.info(f"Logging in to scoring service at {url}")

        try:
            response = self.http.post(
                url,
                json={"username": self.username, "password": self.password},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise AuthError(f"Login to scoring service timed out: {e}") from e
        except requests.RequestException as e:
            raise AuthError(f"Login to scoring service failed: {e}") from e

        if not response.ok:
            raise AuthError(
                f"Login to scoring service rejected with HTTP {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise AuthError(f"Malformed login response: {e}") from e

        if not isinstance(body, dict):
            raise AuthError("Malformed login response: expected JSON object")

        token = body.get("token")
        if not isinstance(token, str) or not token:
            raise AuthError("Login response did not contain a token")

        now = self.clock()
        expires_at = self._expiry_from_body(body, now) or now + self.token_ttl
        self.logger.info(f"Scoring service token valid until {expires_at.isoformat()}")
        return Session(token=token, expires_at=expires_at)

    def _expiry_from_body(self, body: Dict[str, Any], now: datetime) -> Optional[datetime]:
        """Expiry advertised by the login response, if any."""
        expires_in = body.get("expiresIn")
        if isinstance(expires_in, (int, float)) and not isinstance(expires_in, bool):
            return now + timedelta(seconds=expires_in)

        expires_at = body.get("expiresAt")
        if isinstance(expires_at, str):
            try:
                parsed = datetime.fromisoformat(expires_at.replace("Z", "+00:00"))
            except ValueError:
                self.logger.warning(f"Ignoring unparseable expiresAt: {expires_at}")
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed

        return None
