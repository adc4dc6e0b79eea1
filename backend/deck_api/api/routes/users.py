"""User Routes — registration and login are public; account changes need a token."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from deck_api.api.dependencies import (
    AuthenticatedUser, GuardedRoute, get_current_user,
)
from deck_api.config import Settings, get_settings
from deck_api.core.enforce_ids import parse_resource_id
from deck_api.infrastructure.database import get_db
from deck_api.schemas.user import (
    LoginRequest, MessageResponse, RegisterRequest, TokenResponse,
    UserResponse, UserUpdate,
)
from deck_api.services.handle_users import UserHandlers

router = APIRouter(
    prefix="/users", tags=["users"], route_class=GuardedRoute,
)


def get_handlers(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserHandlers:
    return UserHandlers(db, settings)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest, handlers: UserHandlers = Depends(get_handlers),
):
    return await handlers.register(body)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, handlers: UserHandlers = Depends(get_handlers)):
    return await handlers.login(body)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: UserUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    handlers: UserHandlers = Depends(get_handlers),
):
    return await handlers.update_user(user.id, parse_resource_id(user_id), body)


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    handlers: UserHandlers = Depends(get_handlers),
):
    return await handlers.delete_user(user.id, parse_resource_id(user_id))
