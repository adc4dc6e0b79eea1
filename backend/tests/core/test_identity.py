"""Identity Tokens — verifies issuance and the tagged verification verdicts.

Invariants:
    - A freshly issued token verifies to the same user id and email
    - Every failure mode maps to exactly one RejectionReason, never an exception
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from deck_api.core.domain_types import RejectionReason
from deck_api.core.identity import (
    TokenRejection, VerifiedIdentity, issue_token, verify_token,
)

SECRET = "unit-test-secret-0123456789"
ALGO = "HS256"


def _issue(user_id=7, email="nami@example.com", **kwargs):
    kwargs.setdefault("expires_in", timedelta(minutes=5))
    return issue_token(user_id, email, secret=SECRET, algorithm=ALGO, **kwargs)


def test_issued_token_verifies_to_identity():
    verdict = verify_token(_issue(), secret=SECRET, algorithm=ALGO)
    assert verdict == VerifiedIdentity(user_id=7, email="nami@example.com")


def test_token_claims_carry_subject_as_string():
    claims = jwt.get_unverified_claims(_issue(user_id=42))
    assert claims["sub"] == "42"
    assert claims["email"] == "nami@example.com"
    assert claims["exp"] > claims["iat"]


def test_missing_token_rejected():
    assert verify_token(None, secret=SECRET, algorithm=ALGO) == TokenRejection(
        RejectionReason.MISSING,
    )
    assert verify_token("", secret=SECRET, algorithm=ALGO).reason is RejectionReason.MISSING


def test_garbage_token_is_malformed():
    verdict = verify_token("not-a-token", secret=SECRET, algorithm=ALGO)
    assert verdict.reason is RejectionReason.MALFORMED


def test_expired_token_rejected():
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = _issue(now=past, expires_in=timedelta(minutes=1))
    verdict = verify_token(token, secret=SECRET, algorithm=ALGO)
    assert verdict.reason is RejectionReason.EXPIRED


def test_forged_signature_rejected():
    token = issue_token(
        7, "nami@example.com",
        secret="some-other-secret-entirely", algorithm=ALGO,
        expires_in=timedelta(minutes=5),
    )
    verdict = verify_token(token, secret=SECRET, algorithm=ALGO)
    assert verdict.reason is RejectionReason.INVALID_SIGNATURE


def test_non_numeric_subject_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "zoro", "exp": now + timedelta(minutes=5)}, SECRET, algorithm=ALGO,
    )
    verdict = verify_token(token, secret=SECRET, algorithm=ALGO)
    assert verdict.reason is RejectionReason.INVALID_CLAIMS


def test_token_without_expiry_rejected():
    token = jwt.encode({"sub": "7"}, SECRET, algorithm=ALGO)
    verdict = verify_token(token, secret=SECRET, algorithm=ALGO)
    assert isinstance(verdict, TokenRejection)
    assert verdict.reason is RejectionReason.INVALID_CLAIMS


def test_token_without_subject_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode({"exp": now + timedelta(minutes=5)}, SECRET, algorithm=ALGO)
    verdict = verify_token(token, secret=SECRET, algorithm=ALGO)
    assert verdict.reason is RejectionReason.INVALID_CLAIMS


def test_subject_beyond_storable_range_rejected():
    verdict = verify_token(_issue(user_id=2**40), secret=SECRET, algorithm=ALGO)
    assert verdict.reason is RejectionReason.INVALID_CLAIMS
