"""Auth Dependencies — bearer-token guard for mutating routes.

Invariants:
    - Missing, malformed, expired or forged tokens all end in 401 before the handler runs
    - On guarded routes the token is checked before the request body is read, so an
      unauthenticated write is 401 even when its body is not valid JSON
    - Identity reaches handlers only as an AuthenticatedUser parameter, never through
      query, path or body fields a client could set
    - Token text is never logged

Usage:
    router = APIRouter(prefix="/things", route_class=GuardedRoute)

    @router.post("")
    async def create(user: AuthenticatedUser = Depends(get_current_user)):
        ...
"""

import logging
from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, Request, Response
from fastapi.dependencies.models import Dependant
from fastapi.routing import APIRoute
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from deck_api.config import Settings, get_settings
from deck_api.core.errors import AuthenticationError
from deck_api.core.identity import TokenRejection, verify_token

logger = logging.getLogger(__name__)

# auto_error=False: rejections go through our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Caller identity established by the bearer token."""
    id: int
    email: str | None = None


def authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> AuthenticatedUser:
    """Verify the bearer credentials or raise AuthenticationError."""
    token = credentials.credentials if credentials else None
    verdict = verify_token(
        token, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm,
    )
    if isinstance(verdict, TokenRejection):
        logger.info(
            "Rejected bearer token",
            extra={"reason": verdict.reason.value, "path": request.url.path},
        )
        raise AuthenticationError(verdict.reason.value)
    return AuthenticatedUser(id=verdict.user_id, email=verdict.email)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedUser:
    """Verify the bearer token and return the caller's identity."""
    return authenticate(request, credentials, settings)


def requires_user(dependant: Dependant) -> bool:
    return any(
        dep.call is get_current_user or requires_user(dep)
        for dep in dependant.dependencies
    )


class GuardedRoute(APIRoute):
    """Route that authenticates before FastAPI reads and decodes the body.

    Applies only to endpoints depending on get_current_user; public routes on the
    same router are left untouched.
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()
        if not requires_user(self.dependant):
            return handler

        async def guarded_handler(request: Request) -> Response:
            credentials = await bearer_scheme(request)
            authenticate(request, credentials, get_settings())
            return await handler(request)

        return guarded_handler
