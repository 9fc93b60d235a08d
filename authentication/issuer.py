from __future__ import annotations

import secrets
import uuid
from typing import Callable

from authentication.errors import InfrastructureFailure
from authentication.models import AccessToken
from authentication.token_store import AccessTokenStore

ACCESS_TOKEN_EXPIRES_IN = 3600
ACCESS_TOKEN_BYTES = 32


def generate_access_token() -> str:
    return secrets.token_urlsafe(ACCESS_TOKEN_BYTES)


class TokenIssuer:
    def __init__(
        self,
        token_store: AccessTokenStore,
        *,
        expires_in: int = ACCESS_TOKEN_EXPIRES_IN,
        token_factory: Callable[[], str] = generate_access_token,
    ) -> None:
        self.token_store = token_store
        self.expires_in = expires_in
        self._token_factory = token_factory

    async def issue(self, user_id: uuid.UUID) -> AccessToken:
        access_token = AccessToken(
            token=self._token_factory(),
            user_id=user_id,
            expires_in=self.expires_in,
        )
        try:
            await self.token_store.insert(access_token)
        except Exception as error:
            raise InfrastructureFailure(f"Failed to persist access token: {error}") from error
        return access_token
