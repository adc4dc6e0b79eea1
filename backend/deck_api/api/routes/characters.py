"""Character Routes — public reads, authenticated writes.

Invariants:
    - GET /characters answers 204 with no body when there are no characters
    - GET /characters/{name}/affiliation looks up by exact character name
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from deck_api.api.dependencies import (
    AuthenticatedUser, GuardedRoute, get_current_user,
)
from deck_api.core.enforce_ids import parse_resource_id
from deck_api.infrastructure.database import get_db
from deck_api.schemas.character import (
    AffiliationResponse, CharacterCreate, CharacterResponse, CharacterUpdate,
)
from deck_api.services.handle_characters import CharacterHandlers

router = APIRouter(
    prefix="/characters", tags=["characters"], route_class=GuardedRoute,
)


def get_handlers(db: AsyncSession = Depends(get_db)) -> CharacterHandlers:
    return CharacterHandlers(db)


@router.get(
    "", response_model=list[CharacterResponse],
    responses={204: {"description": "No characters"}},
)
async def list_characters(handlers: CharacterHandlers = Depends(get_handlers)):
    characters = await handlers.list_characters()
    if not characters:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return characters


@router.get("/{name}/affiliation", response_model=AffiliationResponse)
async def get_character_affiliation(
    name: str, handlers: CharacterHandlers = Depends(get_handlers),
):
    return await handlers.get_affiliation_by_name(name)


@router.get("/{character_id}", response_model=CharacterResponse)
async def get_character(
    character_id: str, handlers: CharacterHandlers = Depends(get_handlers),
):
    return await handlers.get_character(parse_resource_id(character_id))


@router.post(
    "", response_model=CharacterResponse, status_code=status.HTTP_201_CREATED,
)
async def create_character(
    body: CharacterCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    handlers: CharacterHandlers = Depends(get_handlers),
):
    return await handlers.create_character(body)


@router.patch("/{character_id}", response_model=CharacterResponse)
async def update_character(
    character_id: str,
    body: CharacterUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    handlers: CharacterHandlers = Depends(get_handlers),
):
    return await handlers.update_character(parse_resource_id(character_id), body)


@router.delete("/{character_id}", response_model=CharacterResponse)
async def delete_character(
    character_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    handlers: CharacterHandlers = Depends(get_handlers),
):
    return await handlers.delete_character(parse_resource_id(character_id))
