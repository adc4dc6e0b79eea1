"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - app.state.db_manager set for routes that talk to the manager directly (readiness)
    - Seed fixtures commit through their own session and return detached rows

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Tokens minted with issue_token and the configured secret, like a real login
"""

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from deck_api.config import get_settings
from deck_api.core.identity import issue_token
from deck_api.core.passwords import hash_password
from deck_api.db.base import Base
from deck_api.infrastructure.database import DatabaseSessionManager, get_db
from deck_api.main import app
from deck_api.models import Affiliation, Character, Deck, User


def _bearer_headers(user_id: int, email: str = "someone@example.com") -> dict:
    settings = get_settings()
    token = issue_token(
        user_id, email,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(minutes=5),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.db_manager


@pytest.fixture
async def seed_user(test_session_factory):
    async with test_session_factory() as db:
        user = User(
            email="admin@example.com",
            password=hash_password("admin-password", rounds=4),
        )
        db.add(user)
        await db.commit()
        return user


@pytest.fixture
def make_auth_headers():
    """Bearer headers for an arbitrary user id (valid signature, short expiry)."""
    return _bearer_headers


@pytest.fixture
def auth_headers(seed_user):
    return _bearer_headers(seed_user.id, seed_user.email)


@pytest.fixture
async def seed_characters(test_session_factory):
    """Luffy (Straw Hat Pirates) and Baggy (Baggy's Delivery)."""
    async with test_session_factory() as db:
        straw_hat = Affiliation(name="Straw Hat Pirates")
        baggy_delivery = Affiliation(name="Baggy's Delivery")
        db.add_all([straw_hat, baggy_delivery])
        await db.flush()

        luffy = Character(
            name="Monkey D. Luffy", affiliation_id=straw_hat.id,
            life_points=1000, size=1.74, age=19, weight=70, image_url="",
        )
        baggy = Character(
            name="Baggy", affiliation_id=baggy_delivery.id,
            life_points=500, size=1.92, age=39, weight=50, image_url="",
        )
        db.add_all([luffy, baggy])
        await db.commit()
        return {
            "straw_hat": straw_hat,
            "baggy_delivery": baggy_delivery,
            "luffy": luffy,
            "baggy": baggy,
        }


@pytest.fixture
async def seed_deck(test_session_factory, seed_user, seed_characters):
    """Deck owned by seed_user containing Luffy only."""
    async with test_session_factory() as db:
        luffy = await db.get(Character, seed_characters["luffy"].id)
        deck = Deck(name="Pirate Deck", owner_id=seed_user.id, characters=[luffy])
        db.add(deck)
        await db.commit()
        return deck
