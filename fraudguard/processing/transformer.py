"""
Maps host transactions onto the scoring service's transaction shape.
"""

from typing import Dict, Optional

from ..models.transaction import TransactionRequest, ScoringTransaction, TransactionType


TRANSACTION_TYPE_MAP: Dict[str, TransactionType] = {
    "FT": TransactionType.TRANSFER,
    "CW": TransactionType.WITHDRAWAL,
    "CD": TransactionType.DEPOSIT,
    "BP": TransactionType.PAYMENT,
    "CH": TransactionType.PAYMENT,  # cheque
}

DEFAULT_TRANSACTION_TYPE = TransactionType.TRANSFER

CHANNEL_DEVICE_MAP: Dict[str, str] = {
    "INTERNET": "Web",
    "ATM": "ATM",
    "BRANCH": "Branch",
}

UNKNOWN_DEVICE = "Unknown"


class TransactionTransformer:
    """Build a ScoringTransaction from a host TransactionRequest.

    The mapping never fails: unknown transaction codes fall back to
    Transfer and unknown channels to an "Unknown" device.
    """

    def __init__(self, country_prefix: str = "NG"):
        self.country_prefix = country_prefix

    def transform(self, request: TransactionRequest) -> ScoringTransaction:
        return ScoringTransaction(
            sender_account_number=request.debit_account,
            receiver_account_number=request.credit_account,
            amount=request.amount,
            transaction_type=self.map_transaction_type(request.transaction_code),
            location=self.extract_location(request),
            device=self.extract_device(request),
            ip_address=request.client_ip_address or None,
            timestamp=request.transaction_date,
        )

    @staticmethod
    def map_transaction_type(code: Optional[str]) -> TransactionType:
        return TRANSACTION_TYPE_MAP.get(code or "", DEFAULT_TRANSACTION_TYPE)

    def extract_location(self, request: TransactionRequest) -> Optional[str]:
        if request.branch_code:
            return f"{self.country_prefix}-{request.branch_code}"
        if request.geo_location:
            return request.geo_location
        return None

    @staticmethod
    def extract_device(request: TransactionRequest) -> str:
        channel = request.channel_type
        if channel == "MOBILE":
            return request.device_info or "Mobile"
        return CHANNEL_DEVICE_MAP.get(channel or "", UNKNOWN_DEVICE)
