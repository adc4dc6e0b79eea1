"""Password Hashing — bcrypt salted hashes and constant-time verification.

Invariants:
    - Plaintext passwords are never stored or logged
    - verify_password never raises on a malformed stored hash (returns False)
    - bcrypt only considers the first 72 bytes: longer inputs are refused at the schema
"""

from functools import lru_cache

import bcrypt

MAX_PASSWORD_BYTES = 72


def hash_password(plain: str, rounds: int = 10) -> str:
    hashed = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return hash_password("dummy-password", rounds)


def burn_verification(plain: str, rounds: int = 10) -> None:
    """Spend one bcrypt check at the same cost as a real one (unknown-email logins)."""
    verify_password(plain, _dummy_hash(rounds))
