from __future__ import annotations

import os
from pathlib import Path

import uvicorn
from starlette.applications import Starlette

from authentication.client_registry import ClientRegistry
from authentication.code_store import (
    AuthorizationCodeStore,
    FileAuthorizationCodeStore,
    MemoryAuthorizationCodeStore,
)
from authentication.oauth_server import OAuthServer
from authentication.token_store import (
    AccessTokenStore,
    FileAccessTokenStore,
    MemoryAccessTokenStore,
)
from authentication.user_directory import UserDirectory
from shopping.constants import (
    ACCESS_TOKENS_FILE,
    AUTHORIZATION_CODES_FILE,
    CLIENTS_FILE,
    LOGGER,
    USERS_FILE,
)
from shopping.env import (
    _get_env_int,
    get_data_dir,
    get_public_url,
    load_env,
    parse_csv_env,
    password_grant_enabled,
    setup_logging,
    validate_env,
)
from shopping.http import bearer_user_provider, cors_middleware, health_routes


def build_stores(
    data_dir: Path | None,
) -> tuple[ClientRegistry, UserDirectory, AuthorizationCodeStore, AccessTokenStore]:
    if data_dir is None:
        LOGGER.info("Using in-memory stores")
        return (
            ClientRegistry(),
            UserDirectory(),
            MemoryAuthorizationCodeStore(),
            MemoryAccessTokenStore(),
        )

    LOGGER.info("Using file stores in %s", data_dir)
    return (
        ClientRegistry(data_dir / CLIENTS_FILE),
        UserDirectory(data_dir / USERS_FILE),
        FileAuthorizationCodeStore(data_dir / AUTHORIZATION_CODES_FILE),
        FileAccessTokenStore(data_dir / ACCESS_TOKENS_FILE),
    )


def create_app() -> Starlette:
    load_env()
    setup_logging()
    validate_env()

    client_registry, user_directory, code_store, token_store = build_stores(get_data_dir())
    oauth_server = OAuthServer(
        public_url=get_public_url(),
        client_registry=client_registry,
        code_store=code_store,
        token_store=token_store,
        user_directory=user_directory if password_grant_enabled() else None,
        current_user_fn=bearer_user_provider(token_store),
    )

    app = Starlette(
        routes=[*oauth_server.routes(), *health_routes()],
        middleware=cors_middleware(parse_csv_env("SHOPPING_CORS_ORIGINS")),
    )
    app.state.oauth_server = oauth_server
    return app


def main() -> None:
    host = os.getenv("SHOPPING_HOST", "127.0.0.1")
    port = _get_env_int("SHOPPING_PORT", 8000)
    app = create_app()
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
