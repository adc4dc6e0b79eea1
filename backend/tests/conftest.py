"""Root conftest — shared test configuration."""

import os

# Must be set before deck_api.main is imported (settings are read at import time)
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-deck-api-tests")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
