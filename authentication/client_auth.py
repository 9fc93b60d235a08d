from __future__ import annotations

import uuid

from starlette.concurrency import run_in_threadpool

from authentication.client_registry import ClientRegistry
from authentication.errors import (
    InvalidClientSecret,
    InvalidRequest,
    MissingClientSecret,
    UnknownClient,
)
from authentication.hashing import verify_secret
from authentication.models import ClientApp


def parse_client_id(raw: str | None) -> uuid.UUID:
    if raw is None or not raw.strip():
        raise InvalidRequest("Missing client_id parameter value.")
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        raise InvalidRequest(f"Invalid client_id: {raw}")


class ClientAuthenticator:
    """Gate run before any grant handler: the client must prove its secret."""

    def __init__(self, client_registry: ClientRegistry) -> None:
        self.client_registry = client_registry

    async def authenticate(self, client_id: str | None, client_secret: str | None) -> ClientApp:
        parsed_id = parse_client_id(client_id)
        client = self.client_registry.get(parsed_id)
        if client is None:
            raise UnknownClient(str(parsed_id))

        # Blank secrets are rejected before any hash is computed.
        if client_secret is None or not client_secret.strip():
            raise MissingClientSecret(str(parsed_id))

        # PBKDF2 is CPU bound; keep it off the event loop.
        if not await run_in_threadpool(verify_secret, client_secret, client.salt, client.secret):
            raise InvalidClientSecret(str(parsed_id))
        return client
