"""Character ORM — a playable character with stats and one affiliation.

Invariants:
    - name is unique (checked by the service before insert, backed by a unique index)
    - affiliation_id is nullable at the column level but set on every create
    - Deck membership lives in deck_characters; a character holds no back-reference

Design Decisions:
    - affiliation loaded with selectin: every character response embeds it
"""

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deck_api.db.base import Base


class Character(Base):
    __tablename__ = "characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    affiliation_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("affiliations.id"), nullable=True,
    )
    life_points: Mapped[int] = mapped_column(Integer, nullable=False)
    size: Mapped[float | None] = mapped_column(Float, nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    affiliation: Mapped[Optional["Affiliation"]] = relationship(
        "Affiliation", lazy="selectin",
    )
