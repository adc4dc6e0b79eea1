"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - The authenticated subject id is wrapped in its own NewType
    - Token rejection reasons are an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize into log records without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class RejectionReason(str, Enum):
    """Why a bearer token was refused."""
    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_CLAIMS = "invalid_claims"
