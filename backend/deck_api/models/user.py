"""User ORM — an account that logs in and owns decks.

Invariants:
    - email is unique
    - password holds a bcrypt hash, never plaintext
    - Deleting a user deletes the decks they own
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deck_api.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(100), nullable=False)

    decks: Mapped[list["Deck"]] = relationship(
        "Deck", back_populates="owner",
        cascade="all, delete-orphan",
    )
