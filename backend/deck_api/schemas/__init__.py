"""API Schemas — Pydantic request/response models with field-level validation.

Invariants:
    - JSON keys are camelCase on the wire; snake_case names are accepted on input
    - Response models never expose password hashes
    - Integer inputs that reach an Integer column fit in 32 bits (400 otherwise)
"""

from typing import Annotated

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from deck_api.core.enforce_ids import MAX_DB_INT, MIN_DB_INT

CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)

DbInt = Annotated[int, Field(ge=MIN_DB_INT, le=MAX_DB_INT)]
ReferenceId = Annotated[int, Field(ge=1, le=MAX_DB_INT)]
