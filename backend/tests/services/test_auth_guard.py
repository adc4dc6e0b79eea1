"""Auth Guard — every mutating route refuses callers without a valid token.

Invariants:
    - Missing, malformed, expired, forged and subject-less tokens all give 401
    - A refused request never reaches storage (row counts unchanged)
    - The 401 carries the standard envelope and a Bearer challenge
    - Read routes stay public
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from sqlalchemy import func, select

from deck_api.config import get_settings
from deck_api.core.identity import issue_token
from deck_api.models import Affiliation, Character, Deck, User

PROTECTED = [
    ("post", "/characters", {"name": "Zoro", "affiliation": {"name": "Straw Hat Pirates"}, "lifePoints": 950}),
    ("patch", "/characters/1", {"age": 99}),
    ("delete", "/characters/1", None),
    ("post", "/decks", {"name": "Sneaky", "characterIds": [1]}),
    ("patch", "/decks/1", {"characterIds": []}),
    ("delete", "/decks/1", None),
    ("patch", "/users/1", {"email": "thief@example.com"}),
    ("delete", "/users/1", None),
]


async def _row_counts(session_factory) -> dict:
    counts = {}
    async with session_factory() as db:
        for model in (Affiliation, Character, Deck, User):
            counts[model.__name__] = (
                await db.execute(select(func.count()).select_from(model))
            ).scalar_one()
    return counts


async def _send(client, method, path, payload, headers=None):
    kwargs = {"headers": headers or {}}
    if payload is not None:
        kwargs["json"] = payload
    if method == "delete":
        return await client.delete(path, **kwargs)
    return await client.request(method.upper(), path, **kwargs)


def _expired_token() -> str:
    settings = get_settings()
    return issue_token(
        1, "admin@example.com",
        secret=settings.jwt_secret, algorithm=settings.jwt_algorithm,
        expires_in=timedelta(minutes=1),
        now=datetime.now(timezone.utc) - timedelta(hours=1),
    )


def _forged_token() -> str:
    return issue_token(
        1, "admin@example.com",
        secret="attacker-chosen-secret-key", algorithm="HS256",
        expires_in=timedelta(minutes=5),
    )


def _subjectless_token() -> str:
    settings = get_settings()
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    return jwt.encode({"exp": exp}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


BAD_HEADERS = {
    "missing": None,
    "wrong_scheme": lambda: {"Authorization": "Basic YWRtaW46YWRtaW4="},
    "malformed": lambda: {"Authorization": "Bearer not.a.jwt"},
    "garbage": lambda: {"Authorization": "Bearer garbage"},
    "expired": lambda: {"Authorization": f"Bearer {_expired_token()}"},
    "forged": lambda: {"Authorization": f"Bearer {_forged_token()}"},
    "no_subject": lambda: {"Authorization": f"Bearer {_subjectless_token()}"},
}


@pytest.mark.parametrize("method,path,payload", PROTECTED)
async def test_unauthenticated_write_is_401_without_mutation(
    client, seed_deck, test_session_factory, method, path, payload,
):
    before = await _row_counts(test_session_factory)

    res = await _send(client, method, path, payload)

    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}
    assert res.headers["www-authenticate"] == "Bearer"
    assert await _row_counts(test_session_factory) == before


@pytest.mark.parametrize("kind", sorted(BAD_HEADERS))
async def test_bad_tokens_are_401(client, seed_deck, test_session_factory, kind):
    make_headers = BAD_HEADERS[kind]
    headers = make_headers() if make_headers else None
    before = await _row_counts(test_session_factory)

    res = await _send(client, "post", "/decks", {"name": "Sneaky"}, headers)

    assert res.status_code == 401
    assert await _row_counts(test_session_factory) == before


async def test_auth_checked_before_id_parsing(client):
    res = await client.delete("/characters/abc")
    assert res.status_code == 401


@pytest.mark.parametrize("path", ["/characters", "/decks", "/characters/1", "/decks/1"])
async def test_reads_are_public(client, seed_deck, path):
    res = await client.get(path)
    assert res.status_code == 200


# ─── Guard runs before the body is read ─────────────────────────

@pytest.mark.parametrize("method,path", [
    ("POST", "/characters"),
    ("PATCH", "/characters/1"),
    ("POST", "/decks"),
    ("PATCH", "/users/1"),
])
async def test_unauthenticated_write_with_malformed_json_is_401(
    client, seed_deck, test_session_factory, method, path,
):
    before = await _row_counts(test_session_factory)

    res = await client.request(
        method, path, content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}
    assert await _row_counts(test_session_factory) == before


async def test_authenticated_write_with_malformed_json_is_400(client, auth_headers):
    res = await client.post(
        "/characters", content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request data"


async def test_public_routes_skip_the_guard(client):
    res = await client.post(
        "/users/login", content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400


async def test_rejected_token_logged_once_with_reason(client, caplog):
    with caplog.at_level(logging.INFO, logger="deck_api.api.dependencies"):
        await client.post("/decks", json={"name": "x"})

    rejections = [r for r in caplog.records if r.getMessage() == "Rejected bearer token"]
    assert len(rejections) == 1
    assert rejections[0].reason == "missing"
    assert rejections[0].path == "/decks"
