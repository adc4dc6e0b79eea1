"""Resource Id Parsing — path segments to surrogate integer keys.

Invariants:
    - Non-numeric ids are a client error (400), raised before any storage access
    - Ids outside 1..MAX_DB_INT are refused the same way: no surrogate key can hold
      them, and the driver would overflow on bind
"""

from deck_api.core.errors import RequestValidationFailed

INVALID_ID_MESSAGE = "ID invalid. Must be a number."

# Integer columns are 32-bit signed on PostgreSQL.
MIN_DB_INT = -(2**31)
MAX_DB_INT = 2**31 - 1


def parse_resource_id(raw: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise RequestValidationFailed(INVALID_ID_MESSAGE, field="id") from None
    if not 1 <= value <= MAX_DB_INT:
        raise RequestValidationFailed(INVALID_ID_MESSAGE, field="id")
    return value
