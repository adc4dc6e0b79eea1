"""Deck ORM — a user-owned collection of characters.

Invariants:
    - owner_id is set once at creation from the authenticated caller
    - Membership is a plain many-to-many (deck_characters); replacing the
      collection rewrites the association rows

Design Decisions:
    - ON DELETE CASCADE on both association FKs: membership rows never outlive
      either side when the database enforces foreign keys
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deck_api.db.base import Base

deck_characters = Table(
    "deck_characters",
    Base.metadata,
    Column(
        "deck_id", Integer,
        ForeignKey("decks.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "character_id", Integer,
        ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class Deck(Base):
    __tablename__ = "decks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )

    owner: Mapped["User"] = relationship(
        "User", back_populates="decks", lazy="selectin",
    )
    characters: Mapped[list["Character"]] = relationship(
        "Character", secondary=deck_characters, lazy="selectin",
        order_by="Character.id",
    )
