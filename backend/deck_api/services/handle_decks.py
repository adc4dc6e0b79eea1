"""Deck Handlers — list, fetch, create, patch and delete decks.

Invariants:
    - owner_id comes from the authenticated caller, set once at creation
    - characterIds on update is replace-set: membership becomes exactly that set
    - Character ids are linked without a separate existence check; an id with no row
      surfaces as a storage failure (500), never as a partial link
    - Every response embeds the owner (id only) and the full membership
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from deck_api.core.errors import (
    AuthenticationError, DatabaseError, ResourceNotFoundError,
)
from deck_api.models.character import Character
from deck_api.models.deck import Deck
from deck_api.models.user import User
from deck_api.schemas.deck import DeckCreate, DeckResponse, DeckUpdate

logger = logging.getLogger(__name__)


class DeckHandlers:
    """CRUD over decks owned by users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_decks(self) -> list[DeckResponse]:
        result = await self.db.execute(select(Deck).order_by(Deck.id))
        return [DeckResponse.model_validate(d) for d in result.scalars().all()]

    async def get_deck(self, deck_id: int) -> DeckResponse:
        deck = await self._get_or_404(deck_id)
        return DeckResponse.model_validate(deck)

    async def list_decks_with_character(self, character_id: int) -> list[DeckResponse]:
        result = await self.db.execute(
            select(Deck)
            .join(Deck.characters)
            .where(Character.id == character_id)
            .order_by(Deck.id),
        )
        return [DeckResponse.model_validate(d) for d in result.scalars().unique().all()]

    async def create_deck(self, owner_id: int, body: DeckCreate) -> DeckResponse:
        owner = await self.db.get(User, owner_id)
        if owner is None:
            # Token outlived its account.
            raise AuthenticationError("unknown_subject")

        characters = await self._link_characters(body.character_ids or [])
        deck = Deck(name=body.name, owner_id=owner_id, characters=characters)
        deck.owner = owner
        self.db.add(deck)
        await self.db.commit()

        logger.info(
            f"Created deck '{deck.name}'",
            extra={"deck_id": deck.id, "user_id": owner_id},
        )
        return DeckResponse.model_validate(deck)

    async def update_deck(self, deck_id: int, body: DeckUpdate) -> DeckResponse:
        deck = await self._get_or_404(deck_id)

        if body.name:
            deck.name = body.name
        if body.character_ids is not None:
            deck.characters = await self._link_characters(body.character_ids)

        await self.db.commit()
        logger.info(f"Updated deck {deck_id}", extra={"deck_id": deck_id})
        return DeckResponse.model_validate(deck)

    async def delete_deck(self, deck_id: int) -> DeckResponse:
        deck = await self._get_or_404(deck_id)
        snapshot = DeckResponse.model_validate(deck)

        await self.db.delete(deck)
        await self.db.commit()

        logger.info(f"Deleted deck {deck_id}", extra={"deck_id": deck_id})
        return snapshot

    async def _get_or_404(self, deck_id: int) -> Deck:
        result = await self.db.execute(select(Deck).where(Deck.id == deck_id))
        deck = result.scalar_one_or_none()
        if deck is None:
            raise ResourceNotFoundError("Deck")
        return deck

    async def _link_characters(self, character_ids: list[int]) -> list[Character]:
        wanted = list(dict.fromkeys(character_ids))
        if not wanted:
            return []

        result = await self.db.execute(
            select(Character).where(Character.id.in_(wanted)),
        )
        by_id = {c.id: c for c in result.scalars().all()}
        dangling = [cid for cid in wanted if cid not in by_id]
        if dangling:
            raise DatabaseError(
                f"deck links unknown character ids {dangling}", "link",
            )
        return [by_id[cid] for cid in wanted]
