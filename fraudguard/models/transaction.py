"""
Transaction data models for the pre-transaction fraud check.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Any
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value


class TransactionType(Enum):
    """Transaction types understood by the scoring service."""

    TRANSFER = "Transfer"
    WITHDRAWAL = "Withdrawal"
    DEPOSIT = "Deposit"
    PAYMENT = "Payment"


@dataclass
class TransactionRequest:
    """Transaction as presented by the host banking system."""

    # Core transaction data
    transaction_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    debit_account: str = ""
    credit_account: str = ""
    amount: float = 0.0
    transaction_code: Optional[str] = None  # FT, CW, CD, BP, CH

    # Origin
    channel_type: Optional[str] = None  # MOBILE, INTERNET, ATM, BRANCH
    branch_code: Optional[str] = None
    geo_location: Optional[str] = None
    device_info: Optional[str] = None
    client_ip_address: Optional[str] = None

    # Timing
    transaction_date: datetime = field(default_factory=_utcnow)

    # Review annotation, written back by the decision engine
    review_flag: bool = False
    review_reason: Optional[str] = None

    def set_review_flag(self, flag: bool, reason: Optional[str] = None):
        """Mark the transaction for manual review."""
        self.review_flag = flag
        self.review_reason = reason

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to dictionary for serialization."""
        return {
            "transaction_id": self.transaction_id,
            "debit_account": self.debit_account,
            "credit_account": self.credit_account,
            "amount": self.amount,
            "transaction_code": self.transaction_code,
            "channel_type": self.channel_type,
            "branch_code": self.branch_code,
            "geo_location": self.geo_location,
            "device_info": self.device_info,
            "client_ip_address": self.client_ip_address,
            "transaction_date": self.transaction_date.isoformat(),
            "review_flag": self.review_flag,
            "review_reason": self.review_reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransactionRequest":
        """Create transaction request from dictionary."""
        transaction_date = _parse_timestamp(data.get("transaction_date"))

        return cls(
            transaction_id=data.get("transaction_id") or str(uuid.uuid4()),
            debit_account=data.get("debit_account", ""),
            credit_account=data.get("credit_account", ""),
            amount=float(data.get("amount", 0.0)),
            transaction_code=data.get("transaction_code"),
            channel_type=data.get("channel_type"),
            branch_code=data.get("branch_code"),
            geo_location=data.get("geo_location"),
            device_info=data.get("device_info"),
            client_ip_address=data.get("client_ip_address"),
            transaction_date=transaction_date or _utcnow(),
        )


@dataclass(frozen=True)
class ScoringTransaction:
    """Canonical transaction shape sent to the scoring service."""

    sender_account_number: str
    receiver_account_number: str
    amount: float
    transaction_type: TransactionType
    timestamp: datetime
    location: Optional[str] = None
    device: Optional[str] = None
    ip_address: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for POST /api/transactions. Absent optionals are omitted."""
        payload = {
            "senderAccountNumber": self.sender_account_number,
            "receiverAccountNumber": self.receiver_account_number,
            "amount": self.amount,
            "transactionType": self.transaction_type.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.location is not None:
            payload["location"] = self.location
        if self.device is not None:
            payload["device"] = self.device
        if self.ip_address is not None:
            payload["ipAddress"] = self.ip_address
        return payload
