"""Grant types accepted by the token endpoint.

Each grant type is a handler class. ``implemented`` marks the variants that
can resolve a token subject; the dispatcher refuses the others with
:class:`GrantTypeNotImplemented` instead of handing them out.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from enum import Enum

from starlette.concurrency import run_in_threadpool

from authentication.code_store import AuthorizationCodeStore
from authentication.errors import (
    INVALID_USER_CREDENTIALS_DESCRIPTION,
    GrantTypeNotImplemented,
    InfrastructureFailure,
    InvalidAuthorizationCode,
    InvalidGrant,
    InvalidRequest,
)
from authentication.token_request import TokenRequest
from authentication.user_directory import UserDirectory


class GrantType(str, Enum):
    AUTHORIZATION_CODE = "authorization_code"
    PASSWORD = "password"
    REFRESH_TOKEN = "refresh_token"
    CLIENT_CREDENTIALS = "client_credentials"

    @classmethod
    def parse(cls, raw: str | None) -> "GrantType":
        if raw is None or not raw.strip():
            raise InvalidRequest("Missing grant_type parameter value.")
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise InvalidRequest(f"Invalid grant_type parameter value: {raw}")


class GrantHandler(ABC):
    grant_type: GrantType
    implemented = True

    @property
    def enabled(self) -> bool:
        return self.implemented

    @abstractmethod
    async def resolve_subject(self, request: TokenRequest) -> uuid.UUID:
        """Validate the grant credentials and return the token subject."""
        raise NotImplementedError


class AuthorizationCodeGrant(GrantHandler):
    grant_type = GrantType.AUTHORIZATION_CODE

    def __init__(self, code_store: AuthorizationCodeStore) -> None:
        self.code_store = code_store

    async def resolve_subject(self, request: TokenRequest) -> uuid.UUID:
        code = request.code
        if not code:
            raise InvalidRequest("Missing code parameter value.")

        try:
            user_id = await self.code_store.consume(code)
        except Exception as error:
            raise InfrastructureFailure(f"Failed to redeem authorization code: {error}") from error
        if user_id is None:
            raise InvalidAuthorizationCode(code)
        return user_id


class PasswordGrant(GrantHandler):
    """Resource owner password credentials.

    Without a user directory every attempt fails with ``invalid_grant``.
    """

    grant_type = GrantType.PASSWORD

    def __init__(self, user_directory: UserDirectory | None = None) -> None:
        self.user_directory = user_directory

    @property
    def enabled(self) -> bool:
        return self.user_directory is not None

    async def resolve_subject(self, request: TokenRequest) -> uuid.UUID:
        if not request.username or not request.password:
            raise InvalidRequest("Missing username or password parameter value.")

        if self.user_directory is None:
            raise InvalidGrant(
                INVALID_USER_CREDENTIALS_DESCRIPTION,
                detail="Password grant is disabled.",
            )

        user = await run_in_threadpool(
            self.user_directory.verify, request.username, request.password
        )
        if user is None:
            raise InvalidGrant(
                INVALID_USER_CREDENTIALS_DESCRIPTION,
                detail=f"Password check failed for user: {request.username}",
            )
        return user.user_id


class RefreshTokenGrant(GrantHandler):
    grant_type = GrantType.REFRESH_TOKEN
    implemented = False

    async def resolve_subject(self, request: TokenRequest) -> uuid.UUID:
        raise GrantTypeNotImplemented(self.grant_type.value)


class ClientCredentialsGrant(GrantHandler):
    grant_type = GrantType.CLIENT_CREDENTIALS
    implemented = False

    async def resolve_subject(self, request: TokenRequest) -> uuid.UUID:
        raise GrantTypeNotImplemented(self.grant_type.value)


class GrantDispatcher:
    def __init__(self, handlers: list[GrantHandler]) -> None:
        self._handlers = {handler.grant_type: handler for handler in handlers}

    def dispatch(self, raw_grant_type: str | None) -> GrantHandler:
        grant_type = GrantType.parse(raw_grant_type)
        handler = self._handlers.get(grant_type)
        if handler is None or not handler.implemented:
            raise GrantTypeNotImplemented(grant_type.value)
        return handler

    def supported_grant_types(self) -> list[str]:
        return [
            grant_type.value
            for grant_type, handler in self._handlers.items()
            if handler.enabled
        ]


def default_grant_handlers(
    code_store: AuthorizationCodeStore,
    user_directory: UserDirectory | None = None,
) -> list[GrantHandler]:
    return [
        AuthorizationCodeGrant(code_store),
        PasswordGrant(user_directory),
        RefreshTokenGrant(),
        ClientCredentialsGrant(),
    ]
