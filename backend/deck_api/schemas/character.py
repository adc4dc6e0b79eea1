"""Character Schemas — create/update payloads and embedded-affiliation responses.

Invariants:
    - CharacterCreate requires name, affiliation.name and a non-zero lifePoints
    - lifePoints and age are bounded to the 32-bit Integer column range
    - CharacterUpdate carries only the fields the client sent (model_fields_set)
    - affiliation on update is loosely typed so a nameless object reaches the
      service and gets its own error message

Design Decisions:
    - lifePoints of 0 is refused as missing, matching the established create contract
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from deck_api.schemas import CAMEL_CONFIG, DbInt


class AffiliationRef(BaseModel):
    """Affiliation named by natural key on create."""
    name: str = Field(min_length=1)


class AffiliationPatch(BaseModel):
    """Affiliation object on update; name validated by the service."""
    model_config = ConfigDict(extra="ignore")

    name: str | None = None


class CharacterCreate(BaseModel):
    model_config = CAMEL_CONFIG

    name: str = Field(min_length=1, max_length=200)
    affiliation: AffiliationRef
    life_points: DbInt
    size: float | None = None
    age: DbInt | None = None
    weight: float | None = None
    image_url: str | None = None

    @field_validator("life_points")
    @classmethod
    def life_points_present(cls, v: int) -> int:
        if v == 0:
            raise ValueError("lifePoints is required and must be non-zero")
        return v


class CharacterUpdate(BaseModel):
    model_config = CAMEL_CONFIG

    name: str | None = Field(None, min_length=1, max_length=200)
    affiliation: AffiliationPatch | None = None
    life_points: DbInt | None = None
    size: float | None = None
    age: DbInt | None = None
    weight: float | None = None
    image_url: str | None = None


class AffiliationResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    name: str


class CharacterResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    name: str
    affiliation_id: int | None = None
    life_points: int
    size: float | None = None
    age: int | None = None
    weight: float | None = None
    image_url: str | None = None
    affiliation: AffiliationResponse | None = None
