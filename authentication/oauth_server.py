from __future__ import annotations

import logging
from typing import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from authentication.client_auth import ClientAuthenticator
from authentication.client_registry import ClientRegistry
from authentication.code_store import AuthorizationCodeStore
from authentication.errors import (
    ClientAuthenticationError,
    InfrastructureFailure,
    InvalidRequest,
    OAuthError,
)
from authentication.grants import GrantDispatcher, default_grant_handlers
from authentication.issuer import ACCESS_TOKEN_EXPIRES_IN, TokenIssuer
from authentication.models import AccessToken, User
from authentication.token_request import TokenRequest, is_form_content_type, parse_token_request
from authentication.token_store import AccessTokenStore
from authentication.user_directory import UserDirectory

LOGGER = logging.getLogger("shopping.oauth")

TOKEN_PATH = "/auth/token"
METADATA_PATH = "/.well-known/oauth-authorization-server"
NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}

CurrentUserFn = Callable[[Request], Awaitable["User | None"]]


class OAuthServer:
    def __init__(
        self,
        *,
        public_url: str,
        client_registry: ClientRegistry,
        code_store: AuthorizationCodeStore,
        token_store: AccessTokenStore,
        user_directory: UserDirectory | None = None,
        expires_in: int = ACCESS_TOKEN_EXPIRES_IN,
        current_user_fn: CurrentUserFn | None = None,
    ) -> None:
        self.public_url = public_url.rstrip("/")
        self.client_registry = client_registry
        self.code_store = code_store
        self.token_store = token_store

        self.client_authenticator = ClientAuthenticator(client_registry)
        self.dispatcher = GrantDispatcher(default_grant_handlers(code_store, user_directory))
        self.issuer = TokenIssuer(token_store, expires_in=expires_in)
        self._current_user_fn = current_user_fn

    # -- token flow ------------------------------------------------------------

    async def exchange(
        self,
        token_request: TokenRequest,
        *,
        current_user: User | None = None,
    ) -> AccessToken:
        """Run a parsed token request through every gate and issue a token.

        Raises :class:`OAuthError` at the first failing gate and
        :class:`InfrastructureFailure` when a store fails.
        The token is always bound to the user resolved by the grant;
        ``current_user`` is the actor authenticated by the calling layer.
        """
        client = await self.client_authenticator.authenticate(
            token_request.client_id, token_request.client_secret
        )
        LOGGER.debug("Client %s authenticated", client.client_id)

        handler = self.dispatcher.dispatch(token_request.grant_type)
        subject = await handler.resolve_subject(token_request)
        LOGGER.debug("Grant %s validated for user %s", handler.grant_type.value, subject)

        access_token = await self.issuer.issue(subject)
        LOGGER.info(
            "Issued access token grant=%s client=%s user=%s connected_user=%s",
            handler.grant_type.value,
            client.client_id,
            subject,
            current_user.user_id if current_user else None,
        )
        return access_token

    def token_payload(self, access_token: AccessToken) -> dict:
        return {
            "access_token": access_token.token,
            "token_type": "bearer",
            "expires_in": access_token.expires_in,
        }

    # -- routes ----------------------------------------------------------------

    def metadata_payload(self) -> dict:
        # Authorization codes are minted by the backend's authorize endpoint,
        # which is not served here, so no response types are advertised.
        return {
            "issuer": self.public_url,
            "token_endpoint": f"{self.public_url}{TOKEN_PATH}",
            "grant_types_supported": self.dispatcher.supported_grant_types(),
            "token_endpoint_auth_methods_supported": [
                "client_secret_basic",
                "client_secret_post",
            ],
        }

    def routes(self) -> list[Route]:
        async def metadata_route(request: Request) -> Response:
            del request
            return JSONResponse(self.metadata_payload())

        async def token_route(request: Request) -> Response:
            return await self._handle_token(request)

        return [
            Route(METADATA_PATH, metadata_route, methods=["GET"]),
            Route(TOKEN_PATH, token_route, methods=["POST"]),
        ]

    # -- handlers --------------------------------------------------------------

    async def _handle_token(self, request: Request) -> Response:
        try:
            token_request = await self._parse_request(request)
            current_user = await self._resolve_current_user(request)
            access_token = await self.exchange(token_request, current_user=current_user)
        except ClientAuthenticationError as error:
            LOGGER.warning("Client authentication failed: %s", error.detail)
            return self._error(error.to_payload(), error.status_code)
        except OAuthError as error:
            LOGGER.warning("Token request rejected (%s): %s", error.error_code, error.detail)
            return self._error(error.to_payload(), error.status_code)
        except InfrastructureFailure as error:
            LOGGER.exception("Token request failed on infrastructure error")
            return self._error(error.to_payload(), error.status_code)

        return JSONResponse(self.token_payload(access_token), headers=NO_STORE_HEADERS)

    async def _parse_request(self, request: Request) -> TokenRequest:
        if not is_form_content_type(request.headers.get("content-type")):
            raise InvalidRequest("Content type must be application/x-www-form-urlencoded.")

        form = await request.form()
        items = [(key, str(value)) for key, value in form.multi_items()]
        return parse_token_request(items, authorization_header=request.headers.get("authorization"))

    async def _resolve_current_user(self, request: Request) -> User | None:
        if self._current_user_fn is None:
            return None
        try:
            return await self._current_user_fn(request)
        except Exception as error:
            raise InfrastructureFailure(f"Failed to resolve connected user: {error}") from error

    # -- helpers ---------------------------------------------------------------

    def _error(self, payload: dict, status_code: int) -> Response:
        return JSONResponse(payload, status_code=status_code, headers=NO_STORE_HEADERS)
