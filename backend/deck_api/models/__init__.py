"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Natural keys (affiliation name, character name, user email) are unique columns

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from deck_api.models.affiliation import Affiliation  # noqa: F401
from deck_api.models.character import Character  # noqa: F401
from deck_api.models.deck import Deck, deck_characters  # noqa: F401
from deck_api.models.user import User  # noqa: F401
