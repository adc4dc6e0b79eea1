"""Deck Schemas — create/update payloads and owner/character-embedding responses.

Invariants:
    - No payload accepts an owner: ownership comes from the bearer token only
    - characterIds on update replaces the whole membership set
"""

from pydantic import BaseModel, Field

from deck_api.schemas import CAMEL_CONFIG, ReferenceId
from deck_api.schemas.character import CharacterResponse


class DeckCreate(BaseModel):
    model_config = CAMEL_CONFIG

    name: str = Field(min_length=1, max_length=200)
    character_ids: list[ReferenceId] | None = None


class DeckUpdate(BaseModel):
    model_config = CAMEL_CONFIG

    name: str | None = Field(None, min_length=1, max_length=200)
    character_ids: list[ReferenceId] | None = None


class DeckOwner(BaseModel):
    model_config = CAMEL_CONFIG

    id: int


class DeckResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    name: str
    owner_id: int
    owner: DeckOwner
    characters: list[CharacterResponse] = Field(default_factory=list)
