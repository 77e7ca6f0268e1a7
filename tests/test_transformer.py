"""
Tests for the transaction transformer.
"""
import pytest
from dataclasses import replace

from fraudguard.models.transaction import TransactionType
from fraudguard.processing.transformer import TransactionTransformer


class TestTransactionTransformer:
    """Test cases for mapping host transactions to scoring transactions."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("FT", TransactionType.TRANSFER),
            ("CW", TransactionType.WITHDRAWAL),
            ("CD", TransactionType.DEPOSIT),
            ("BP", TransactionType.PAYMENT),
            ("CH", TransactionType.PAYMENT),
            ("XX", TransactionType.TRANSFER),
            (None, TransactionType.TRANSFER),
        ],
    )
    def test_transaction_type_mapping(self, sample_request, code, expected):
        """Known codes map to their type; anything else falls back to Transfer."""
        request = replace(sample_request, transaction_code=code)
        assert TransactionTransformer().transform(request).transaction_type == expected

    def test_core_fields_copied(self, sample_request):
        """Accounts, amount, IP and timestamp come straight from the request."""
        txn = TransactionTransformer().transform(sample_request)

        assert txn.sender_account_number == "0123456789"
        assert txn.receiver_account_number == "9876543210"
        assert txn.amount == 1000.0
        assert txn.ip_address == "102.89.1.10"
        assert txn.timestamp == sample_request.transaction_date

    def test_location_prefers_branch_code(self, sample_request):
        """Branch code wins over geo location and carries the country prefix."""
        request = replace(sample_request, branch_code="0042")
        assert TransactionTransformer().transform(request).location == "NG-0042"

    def test_location_uses_configured_prefix(self, sample_request):
        request = replace(sample_request, branch_code="0042")
        assert TransactionTransformer("GH").transform(request).location == "GH-0042"

    def test_location_falls_back_to_geo(self, sample_request):
        assert TransactionTransformer().transform(sample_request).location == "6.5244,3.3792"

    def test_location_absent_is_none(self, sample_request):
        """No branch code and no geo location means no location, not ''."""
        request = replace(sample_request, branch_code=None, geo_location=None)
        assert TransactionTransformer().transform(request).location is None

    def test_mobile_channel_uses_device_info(self, sample_request):
        assert TransactionTransformer().transform(sample_request).device == "iPhone14"

    def test_mobile_channel_without_device_info(self, sample_request):
        request = replace(sample_request, device_info=None)
        assert TransactionTransformer().transform(request).device == "Mobile"

    @pytest.mark.parametrize(
        "channel,expected",
        [
            ("INTERNET", "Web"),
            ("ATM", "ATM"),
            ("BRANCH", "Branch"),
            ("USSD", "Unknown"),
            (None, "Unknown"),
        ],
    )
    def test_channel_device_mapping(self, sample_request, channel, expected):
        request = replace(sample_request, channel_type=channel)
        assert TransactionTransformer().transform(request).device == expected

    def test_transform_does_not_mutate_request(self, sample_request):
        before = sample_request.to_dict()
        TransactionTransformer().transform(sample_request)
        assert sample_request.to_dict() == before

    def test_payload_shape(self, sample_request):
        """Payload uses the service's camelCase keys and omits absent optionals."""
        request = replace(sample_request, geo_location=None, client_ip_address=None)
        payload = TransactionTransformer().transform(request).to_payload()

        assert payload == {
            "senderAccountNumber": "0123456789",
            "receiverAccountNumber": "9876543210",
            "amount": 1000.0,
            "transactionType": "Transfer",
            "device": "iPhone14",
            "timestamp": "2024-01-01T09:30:00+00:00",
        }
