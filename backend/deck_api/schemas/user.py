"""User Schemas — registration, login, self-service update and token responses.

Invariants:
    - Passwords are capped at 72 UTF-8 bytes (bcrypt input limit)
    - Login accepts any non-empty email text: a malformed address is just an unknown one
    - UserResponse exposes id and email only
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from deck_api.core.passwords import MAX_PASSWORD_BYTES
from deck_api.schemas import CAMEL_CONFIG

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


def _check_password_length(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


Password = Annotated[str, Field(min_length=1), AfterValidator(_check_password_length)]
Email = Annotated[str, Field(min_length=3, max_length=320, pattern=EMAIL_PATTERN)]


class RegisterRequest(BaseModel):
    email: Email
    password: Password


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    email: Email | None = None
    password: Password | None = None


class UserResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    email: str


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str
