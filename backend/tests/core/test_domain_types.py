"""Domain Types — token rejection reasons are stable log values."""

from deck_api.core.domain_types import RejectionReason


def test_rejection_reasons_serialize_to_string():
    assert RejectionReason.EXPIRED.value == "expired"
    assert {r.value for r in RejectionReason} == {
        "missing", "malformed", "expired", "invalid_signature", "invalid_claims",
    }
