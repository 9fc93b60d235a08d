from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from pathlib import Path

from authentication.json_file import JsonFile
from authentication.models import AccessToken


class AccessTokenStore(ABC):
    @abstractmethod
    async def insert(self, token: AccessToken) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get(self, token: str) -> AccessToken | None:
        raise NotImplementedError


class MemoryAccessTokenStore(AccessTokenStore):
    def __init__(self) -> None:
        self._tokens: dict[str, AccessToken] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._tokens)

    async def insert(self, token: AccessToken) -> None:
        with self._lock:
            if token.token in self._tokens:
                raise RuntimeError("Access token already exists.")
            self._tokens[token.token] = token

    async def get(self, token: str) -> AccessToken | None:
        return self._tokens.get(token)


class FileAccessTokenStore(AccessTokenStore):
    def __init__(self, path: str | Path = "access_tokens.json") -> None:
        self._file = JsonFile(path)
        self._lock = threading.Lock()

    async def insert(self, token: AccessToken) -> None:
        with self._lock:
            all_tokens = self._file.read_all()
            if token.token in all_tokens:
                raise RuntimeError("Access token already exists.")
            all_tokens[token.token] = token.to_dict()
            self._file.write_all(all_tokens)

    async def get(self, token: str) -> AccessToken | None:
        payload = self._file.read_all().get(token)
        if payload is None:
            return None
        return AccessToken.from_dict(payload)
