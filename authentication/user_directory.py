from __future__ import annotations

import uuid
from pathlib import Path

from authentication.hashing import generate_salt, hash_secret, verify_secret
from authentication.json_file import JsonFile
from authentication.models import User, UserCredential


class UserDirectory:
    """Resource-owner credentials checked by the password grant."""

    def __init__(self, path: str | Path | None = None) -> None:
        self._file = JsonFile(path) if path is not None else None
        self._credentials: dict[str, UserCredential] = {}
        if self._file is not None:
            for payload in self._file.read_all().values():
                credential = UserCredential.from_dict(payload)
                self._credentials[credential.user.username] = credential

    def register(self, username: str, password: str, *, user_id: uuid.UUID | None = None) -> User:
        if not username.strip():
            raise ValueError("username must not be blank.")
        if username in self._credentials:
            raise ValueError(f"User {username!r} already exists.")

        salt = generate_salt()
        user = User(user_id=user_id or uuid.uuid4(), username=username)
        self._credentials[username] = UserCredential(
            user=user,
            password_hash=hash_secret(password, salt),
            salt=salt,
        )
        self._save()
        return user

    def get(self, username: str) -> User | None:
        credential = self._credentials.get(username)
        if credential is None:
            return None
        return credential.user

    def verify(self, username: str, password: str) -> User | None:
        credential = self._credentials.get(username)
        if credential is None:
            return None
        if not verify_secret(password, credential.salt, credential.password_hash):
            return None
        return credential.user

    def _save(self) -> None:
        if self._file is None:
            return
        self._file.write_all(
            {username: credential.to_dict() for username, credential in self._credentials.items()}
        )
