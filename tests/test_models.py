"""
Tests for the transaction, score and outcome models.
"""
from datetime import datetime, timezone

import pytest

from fraudguard.models.fraud_score import Decision, Outcome, ScoreResult
from fraudguard.models.transaction import TransactionRequest


class TestTransactionRequest:
    """Test cases for the host transaction model."""

    def test_from_dict(self):
        request = TransactionRequest.from_dict(
            {
                "transaction_id": "TXN-9",
                "debit_account": "111",
                "credit_account": "222",
                "amount": "250.50",
                "transaction_code": "CW",
                "channel_type": "ATM",
                "transaction_date": "2024-03-01T08:00:00Z",
            }
        )

        assert request.transaction_id == "TXN-9"
        assert request.amount == 250.5
        assert request.transaction_date == datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
        assert request.review_flag is False

    def test_from_dict_generates_id(self):
        assert TransactionRequest.from_dict({}).transaction_id

    def test_set_review_flag(self, sample_request):
        sample_request.set_review_flag(True, "Medium risk transaction. Risk Score: 55")

        assert sample_request.to_dict()["review_flag"] is True
        assert sample_request.review_reason.endswith("55")


class TestScoreResult:
    """Test cases for parsing scoring responses."""

    def test_from_response(self):
        assert ScoreResult.from_response({"riskScore": 77, "reason": "x"}) == ScoreResult(77, "x")

    def test_reason_optional(self):
        assert ScoreResult.from_response({"riskScore": 0}).reason is None

    @pytest.mark.parametrize(
        "body",
        [None, "85", {"riskScore": None}, {"riskScore": 1.0}, {"riskScore": 5, "reason": 3}],
    )
    def test_malformed(self, body):
        with pytest.raises(ValueError):
            ScoreResult.from_response(body)


class TestOutcome:
    """Test cases for the outcome variants."""

    def test_variants_are_exclusive(self):
        approved = Outcome.approved(10)
        flagged = Outcome.flagged("review", 60)
        rejected = Outcome.rejected("blocked", 90)

        assert (approved.is_approved, approved.is_flagged, approved.is_rejected) == (True, False, False)
        assert (flagged.is_approved, flagged.is_flagged, flagged.is_rejected) == (True, True, False)
        assert (rejected.is_approved, rejected.is_flagged, rejected.is_rejected) == (False, False, True)

    def test_to_dict(self):
        assert Outcome.rejected("blocked", 90).to_dict() == {
            "decision": Decision.REJECTED.value,
            "reason": "blocked",
            "risk_score": 90,
        }
