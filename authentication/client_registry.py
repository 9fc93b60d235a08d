from __future__ import annotations

import uuid
from pathlib import Path

from authentication.hashing import generate_salt, generate_secret, hash_secret
from authentication.json_file import JsonFile
from authentication.models import ClientApp


class ClientRegistry:
    """Registered client applications.

    Only the salted hash of each secret is kept. When ``path`` is given the
    registry is loaded from and written back to that JSON file.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._file = JsonFile(path) if path is not None else None
        self._clients: dict[uuid.UUID, ClientApp] = {}
        if self._file is not None:
            for payload in self._file.read_all().values():
                client = ClientApp.from_dict(payload)
                self._clients[client.client_id] = client

    def register(self, client_name: str) -> tuple[ClientApp, str]:
        """Create a client and return it with its plaintext secret.

        The plaintext secret is not recoverable afterwards.
        """
        secret = generate_secret()
        salt = generate_salt()
        client = ClientApp(
            client_id=uuid.uuid4(),
            secret=hash_secret(secret, salt),
            salt=salt,
            name=client_name,
        )
        self.add(client)
        return client, secret

    def add(self, client: ClientApp) -> None:
        self._clients[client.client_id] = client
        self._save()

    def get(self, client_id: uuid.UUID) -> ClientApp | None:
        return self._clients.get(client_id)

    def hash_secret(self, secret: str, salt: str) -> str:
        return hash_secret(secret, salt)

    def _save(self) -> None:
        if self._file is None:
            return
        self._file.write_all(
            {str(client_id): client.to_dict() for client_id, client in self._clients.items()}
        )
