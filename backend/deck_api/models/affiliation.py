"""Affiliation ORM — a named group a character belongs to.

Invariants:
    - name is unique and matched exactly (case and whitespace significant)
    - Only ever created through get-or-create; never deleted by these flows
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from deck_api.db.base import Base


class Affiliation(Base):
    __tablename__ = "affiliations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
