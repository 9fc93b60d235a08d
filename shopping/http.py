from __future__ import annotations

from typing import Awaitable, Callable

from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from authentication.models import User
from authentication.token_store import AccessTokenStore

from .constants import APP_VERSION, AUTH_MODE


async def health_route(request: Request) -> Response:
    del request
    return JSONResponse(
        {
            "status": "ok",
            "version": APP_VERSION,
            "auth_mode": AUTH_MODE,
        }
    )


def health_routes() -> list[Route]:
    return [Route("/health", health_route, methods=["GET"])]


def cors_middleware(allowed_origins: set[str]) -> list[Middleware]:
    if not allowed_origins:
        return []
    return [
        Middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_origins),
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Authorization", "Content-Type"],
        )
    ]


def extract_bearer_token(authorization_header: str | None) -> str | None:
    if not authorization_header:
        return None
    scheme, _, token = authorization_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def bearer_user_provider(
    token_store: AccessTokenStore,
) -> Callable[[Request], Awaitable[User | None]]:
    """Resolve the connected user from a Bearer access token, if any.

    Expiry is not enforced here; the token store only resolves identity.
    """

    async def current_user(request: Request) -> User | None:
        token = extract_bearer_token(request.headers.get("authorization"))
        if token is None:
            return None
        access_token = await token_store.get(token)
        if access_token is None:
            return None
        return User(user_id=access_token.user_id)

    return current_user
