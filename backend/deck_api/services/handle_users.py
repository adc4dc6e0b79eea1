"""User Handlers — registration, login and self-service account changes.

Invariants:
    - Passwords are stored as bcrypt hashes; responses never echo them
    - Unknown email and wrong password produce the identical 401
    - Update and delete act only on the caller's own account (403 otherwise)
    - Tokens carry the user's id and email and expire after the configured lifetime

Design Decisions:
    - bcrypt runs in a worker thread: hashing is CPU-bound and would stall the event loop
"""

import asyncio
import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from deck_api.config import Settings
from deck_api.core.errors import (
    AuthenticationError, ConflictError, PermissionDeniedError,
    RequestValidationFailed, ResourceNotFoundError,
)
from deck_api.core.identity import issue_token
from deck_api.core.passwords import burn_verification, hash_password, verify_password
from deck_api.models.user import User
from deck_api.schemas.user import (
    LoginRequest, MessageResponse, RegisterRequest, TokenResponse,
    UserResponse, UserUpdate,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
EMAIL_TAKEN_MESSAGE = "Email already exists"


class UserHandlers:
    """Account lifecycle and token issuance."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def register(self, body: RegisterRequest) -> MessageResponse:
        if await self._find_by_email(body.email) is not None:
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        hashed = await asyncio.to_thread(
            hash_password, body.password, self.settings.bcrypt_rounds,
        )
        user = User(email=body.email, password=hashed)
        self.db.add(user)
        await self.db.commit()

        logger.info("Registered user", extra={"user_id": user.id})
        return MessageResponse(message="User created successfully")

    async def login(self, body: LoginRequest) -> TokenResponse:
        user = await self._find_by_email(body.email)
        if user is None:
            await asyncio.to_thread(
                burn_verification, body.password, self.settings.bcrypt_rounds,
            )
            raise AuthenticationError("invalid_credentials", INVALID_CREDENTIALS_MESSAGE)

        valid = await asyncio.to_thread(verify_password, body.password, user.password)
        if not valid:
            raise AuthenticationError("invalid_credentials", INVALID_CREDENTIALS_MESSAGE)

        token = issue_token(
            user.id, user.email,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expires_in=timedelta(minutes=self.settings.jwt_expires_minutes),
        )
        logger.info("Issued token", extra={"user_id": user.id})
        return TokenResponse(token=token)

    async def update_user(
        self, caller_id: int, user_id: int, body: UserUpdate,
    ) -> UserResponse:
        user = await self._own_account_or_raise(caller_id, user_id)

        if body.email is None and body.password is None:
            raise RequestValidationFailed("No data provided to update or invalid.")

        if body.email is not None and body.email != user.email:
            if await self._find_by_email(body.email) is not None:
                raise ConflictError(EMAIL_TAKEN_MESSAGE)
            user.email = body.email
        if body.password is not None:
            user.password = await asyncio.to_thread(
                hash_password, body.password, self.settings.bcrypt_rounds,
            )

        await self.db.commit()
        logger.info("Updated user", extra={"user_id": user_id})
        return UserResponse.model_validate(user)

    async def delete_user(self, caller_id: int, user_id: int) -> UserResponse:
        user = await self._own_account_or_raise(caller_id, user_id)
        snapshot = UserResponse.model_validate(user)

        await self.db.delete(user)
        await self.db.commit()

        logger.info("Deleted user", extra={"user_id": user_id})
        return snapshot

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def _own_account_or_raise(self, caller_id: int, user_id: int) -> User:
        if caller_id != user_id:
            raise PermissionDeniedError("You can only modify your own account.")
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User")
        return user
