"""Character Handlers — list, fetch, create, patch and delete characters.

Invariants:
    - Character names are unique: create and rename both check before writing (409)
    - Create always links an affiliation, resolved by name (get-or-create)
    - Patch applies only fields the client sent; name and lifePoints cannot be nulled
    - A patch needs at least one scalar change or a named affiliation (400 otherwise)
    - Delete unlinks the character from every deck, then returns its prior state
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from deck_api.core.errors import (
    ConflictError, RequestValidationFailed, ResourceNotFoundError,
)
from deck_api.models.character import Character
from deck_api.models.deck import deck_characters
from deck_api.schemas.character import (
    AffiliationResponse, CharacterCreate, CharacterResponse, CharacterUpdate,
)
from deck_api.services.resolve_affiliation import (
    INVALID_AFFILIATION_MESSAGE, AffiliationResolver,
)

logger = logging.getLogger(__name__)

NO_UPDATE_MESSAGE = "No data provided to update or invalid."

# Columns a patch may not set to null.
_NON_NULLABLE = frozenset({"name", "life_points"})


class CharacterHandlers:
    """CRUD over characters, composing the affiliation resolver."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.affiliations = AffiliationResolver(db)

    async def list_characters(self) -> list[CharacterResponse]:
        result = await self.db.execute(select(Character).order_by(Character.id))
        return [CharacterResponse.model_validate(c) for c in result.scalars().all()]

    async def get_character(self, character_id: int) -> CharacterResponse:
        character = await self._get_or_404(character_id)
        return CharacterResponse.model_validate(character)

    async def get_affiliation_by_name(self, name: str) -> AffiliationResponse:
        """Affiliation of the character whose name matches exactly."""
        result = await self.db.execute(
            select(Character).where(Character.name == name),
        )
        character = result.scalar_one_or_none()
        if character is None:
            raise ResourceNotFoundError("Character")
        if character.affiliation is None:
            raise ResourceNotFoundError("Affiliation")
        return AffiliationResponse.model_validate(character.affiliation)

    async def create_character(self, body: CharacterCreate) -> CharacterResponse:
        await self._ensure_name_free(body.name)
        affiliation = await self.affiliations.resolve(body.affiliation.name)

        character = Character(
            name=body.name,
            affiliation_id=affiliation.id,
            life_points=body.life_points,
            size=body.size,
            age=body.age,
            weight=body.weight,
            image_url=body.image_url,
        )
        character.affiliation = affiliation
        self.db.add(character)
        await self.db.commit()

        logger.info(
            f"Created character '{character.name}'",
            extra={"character_id": character.id, "affiliation_id": affiliation.id},
        )
        return CharacterResponse.model_validate(character)

    async def update_character(
        self, character_id: int, body: CharacterUpdate,
    ) -> CharacterResponse:
        character = await self._get_or_404(character_id)

        sent = body.model_dump(exclude_unset=True, exclude={"affiliation"})
        changes = {
            key: value for key, value in sent.items()
            if not (value is None and key in _NON_NULLABLE)
        }
        affiliation_sent = "affiliation" in body.model_fields_set
        affiliation_name = body.affiliation.name if body.affiliation else None

        if not changes and not affiliation_name:
            raise RequestValidationFailed(NO_UPDATE_MESSAGE)
        if affiliation_sent and not affiliation_name:
            raise RequestValidationFailed(
                INVALID_AFFILIATION_MESSAGE, field="affiliation.name",
            )

        new_name = changes.get("name")
        if new_name is not None and new_name != character.name:
            await self._ensure_name_free(new_name)

        for key, value in changes.items():
            setattr(character, key, value)

        if affiliation_name:
            affiliation = await self.affiliations.resolve(affiliation_name)
            character.affiliation = affiliation
            character.affiliation_id = affiliation.id

        await self.db.commit()
        logger.info(
            f"Updated character {character_id}",
            extra={"character_id": character_id},
        )
        return CharacterResponse.model_validate(character)

    async def delete_character(self, character_id: int) -> CharacterResponse:
        character = await self._get_or_404(character_id)
        snapshot = CharacterResponse.model_validate(character)

        await self.db.execute(
            delete(deck_characters).where(
                deck_characters.c.character_id == character_id,
            ),
        )
        await self.db.delete(character)
        await self.db.commit()

        logger.info(
            f"Deleted character {character_id}",
            extra={"character_id": character_id},
        )
        return snapshot

    async def _get_or_404(self, character_id: int) -> Character:
        result = await self.db.execute(
            select(Character).where(Character.id == character_id),
        )
        character = result.scalar_one_or_none()
        if character is None:
            raise ResourceNotFoundError("Character")
        return character

    async def _ensure_name_free(self, name: str) -> None:
        result = await self.db.execute(
            select(Character.id).where(Character.name == name),
        )
        if result.first() is not None:
            raise ConflictError("Character is already existing")
