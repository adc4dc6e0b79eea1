"""Affiliation Resolver — get-or-create an affiliation by its natural key.

Invariants:
    - Exact name match: no trimming, no case folding
    - Repeated resolves of one name converge on one row (one unit of work or many)
    - Never commits: the caller's operation owns the transaction

Design Decisions:
    - Lookup then insert without locking: two concurrent first-time resolves of the
      same name can race; the unique index turns the loser into a DatabaseError
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from deck_api.core.errors import RequestValidationFailed
from deck_api.models.affiliation import Affiliation

logger = logging.getLogger(__name__)

INVALID_AFFILIATION_MESSAGE = "Invalid affiliation. Name is required."


class AffiliationResolver:
    """Resolves affiliation names to rows, creating missing ones."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, name: str) -> Affiliation | None:
        result = await self.db.execute(
            select(Affiliation).where(Affiliation.name == name),
        )
        return result.scalar_one_or_none()

    async def resolve(self, name: str | None) -> Affiliation:
        """Return the affiliation called name, inserting it if absent."""
        if not name:
            raise RequestValidationFailed(
                INVALID_AFFILIATION_MESSAGE, field="affiliation.name",
            )

        affiliation = await self.find(name)
        if affiliation is not None:
            return affiliation

        affiliation = Affiliation(name=name)
        self.db.add(affiliation)
        await self.db.flush()
        logger.info(
            f"Created affiliation '{name}'",
            extra={"affiliation_id": affiliation.id},
        )
        return affiliation
