"""Identity Tokens — issue and verify signed, time-limited bearer tokens.

Invariants:
    - verify_token never raises: every failure becomes a TokenRejection
    - Tokens carry sub (user id as string), email, iat and exp
    - Signing secret, algorithm and lifetime are always passed in, never read here

Design Decisions:
    - Tagged result (VerifiedIdentity | TokenRejection) instead of exceptions, so the
      HTTP guard decides the response and nothing escapes past it
    - Header is parsed before signature checks to tell malformed tokens from forged ones
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from deck_api.core.domain_types import RejectionReason, UserId
from deck_api.core.enforce_ids import MAX_DB_INT


@dataclass(frozen=True)
class VerifiedIdentity:
    """Caller identity decoded from a valid token."""
    user_id: UserId
    email: str | None = None


@dataclass(frozen=True)
class TokenRejection:
    """Token refused, with the reason for logs."""
    reason: RejectionReason


TokenVerdict = VerifiedIdentity | TokenRejection


def issue_token(
    user_id: int,
    email: str,
    *,
    secret: str,
    algorithm: str,
    expires_in: timedelta,
    now: datetime | None = None,
) -> str:
    """Sign a token for user_id valid for expires_in."""
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def verify_token(token: str | None, *, secret: str, algorithm: str) -> TokenVerdict:
    """Check signature and expiry, then extract the subject id."""
    if not token:
        return TokenRejection(RejectionReason.MISSING)

    try:
        jwt.get_unverified_header(token)
    except JWTError:
        return TokenRejection(RejectionReason.MALFORMED)

    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        return TokenRejection(RejectionReason.EXPIRED)
    except JWTClaimsError:
        return TokenRejection(RejectionReason.INVALID_CLAIMS)
    except JWTError:
        return TokenRejection(RejectionReason.INVALID_SIGNATURE)

    return _identity_from_claims(payload)


def _identity_from_claims(payload: dict) -> TokenVerdict:
    sub = payload.get("sub")
    if "exp" not in payload or sub is None:
        return TokenRejection(RejectionReason.INVALID_CLAIMS)
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        return TokenRejection(RejectionReason.INVALID_CLAIMS)
    if not 1 <= user_id <= MAX_DB_INT:
        return TokenRejection(RejectionReason.INVALID_CLAIMS)
    return VerifiedIdentity(user_id=UserId(user_id), email=payload.get("email"))
