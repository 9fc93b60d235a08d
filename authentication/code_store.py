from __future__ import annotations

import secrets
import threading
import uuid
from abc import ABC, abstractmethod
from pathlib import Path

from authentication.json_file import JsonFile
from authentication.models import AuthorizationCode


class AuthorizationCodeStore(ABC):
    """One-time authorization codes, keyed by code value.

    ``consume`` is the only way a code leaves the store: lookup and removal
    happen under one lock, so a code can be redeemed at most once.
    """

    @abstractmethod
    async def issue(self, user_id: uuid.UUID, *, code: str | None = None) -> AuthorizationCode:
        raise NotImplementedError

    @abstractmethod
    async def get(self, code: str) -> AuthorizationCode | None:
        raise NotImplementedError

    @abstractmethod
    async def consume(self, code: str) -> uuid.UUID | None:
        raise NotImplementedError


def _new_code() -> str:
    return secrets.token_urlsafe(32)


class MemoryAuthorizationCodeStore(AuthorizationCodeStore):
    def __init__(self) -> None:
        self._codes: dict[str, AuthorizationCode] = {}
        self._lock = threading.Lock()

    async def issue(self, user_id: uuid.UUID, *, code: str | None = None) -> AuthorizationCode:
        issued = AuthorizationCode(code=code or _new_code(), user_id=user_id)
        with self._lock:
            self._codes[issued.code] = issued
        return issued

    async def get(self, code: str) -> AuthorizationCode | None:
        return self._codes.get(code)

    async def consume(self, code: str) -> uuid.UUID | None:
        with self._lock:
            consumed = self._codes.pop(code, None)
        if consumed is None:
            return None
        return consumed.user_id


class FileAuthorizationCodeStore(AuthorizationCodeStore):
    def __init__(self, path: str | Path = "authorization_codes.json") -> None:
        self._file = JsonFile(path)
        self._lock = threading.Lock()

    async def issue(self, user_id: uuid.UUID, *, code: str | None = None) -> AuthorizationCode:
        issued = AuthorizationCode(code=code or _new_code(), user_id=user_id)
        with self._lock:
            all_codes = self._file.read_all()
            all_codes[issued.code] = issued.to_dict()
            self._file.write_all(all_codes)
        return issued

    async def get(self, code: str) -> AuthorizationCode | None:
        payload = self._file.read_all().get(code)
        if payload is None:
            return None
        return AuthorizationCode.from_dict(payload)

    async def consume(self, code: str) -> uuid.UUID | None:
        with self._lock:
            all_codes = self._file.read_all()
            payload = all_codes.pop(code, None)
            if payload is None:
                return None
            self._file.write_all(all_codes)
        return AuthorizationCode.from_dict(payload).user_id
