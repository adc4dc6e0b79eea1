"""Deck Routes — public reads, authenticated writes owned by the caller.

Invariants:
    - POST /decks sets the owner from the bearer token, never from the body
    - List endpoints answer 204 with no body when empty
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from deck_api.api.dependencies import (
    AuthenticatedUser, GuardedRoute, get_current_user,
)
from deck_api.core.enforce_ids import parse_resource_id
from deck_api.infrastructure.database import get_db
from deck_api.schemas.deck import DeckCreate, DeckResponse, DeckUpdate
from deck_api.services.handle_decks import DeckHandlers

router = APIRouter(
    prefix="/decks", tags=["decks"], route_class=GuardedRoute,
)


def get_handlers(db: AsyncSession = Depends(get_db)) -> DeckHandlers:
    return DeckHandlers(db)


def _list_or_no_content(decks: list[DeckResponse]):
    if not decks:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return decks


@router.get(
    "", response_model=list[DeckResponse],
    responses={204: {"description": "No decks"}},
)
async def list_decks(handlers: DeckHandlers = Depends(get_handlers)):
    return _list_or_no_content(await handlers.list_decks())


@router.get(
    "/character/{character_id}", response_model=list[DeckResponse],
    responses={204: {"description": "No deck contains this character"}},
)
async def list_decks_with_character(
    character_id: str, handlers: DeckHandlers = Depends(get_handlers),
):
    decks = await handlers.list_decks_with_character(parse_resource_id(character_id))
    return _list_or_no_content(decks)


@router.get("/{deck_id}", response_model=DeckResponse)
async def get_deck(deck_id: str, handlers: DeckHandlers = Depends(get_handlers)):
    return await handlers.get_deck(parse_resource_id(deck_id))


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(
    body: DeckCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    handlers: DeckHandlers = Depends(get_handlers),
):
    return await handlers.create_deck(user.id, body)


@router.patch("/{deck_id}", response_model=DeckResponse)
async def update_deck(
    deck_id: str,
    body: DeckUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    handlers: DeckHandlers = Depends(get_handlers),
):
    return await handlers.update_deck(parse_resource_id(deck_id), body)


@router.delete("/{deck_id}", response_model=DeckResponse)
async def delete_deck(
    deck_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    handlers: DeckHandlers = Depends(get_handlers),
):
    return await handlers.delete_deck(parse_resource_id(deck_id))
