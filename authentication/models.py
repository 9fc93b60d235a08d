from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field


@dataclass
class ClientApp:
    client_id: uuid.UUID
    secret: str
    salt: str
    name: str = ""

    def to_dict(self) -> dict:
        return {
            "client_id": str(self.client_id),
            "secret": self.secret,
            "salt": self.salt,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "ClientApp":
        return cls(
            client_id=uuid.UUID(payload["client_id"]),
            secret=payload["secret"],
            salt=payload["salt"],
            name=payload.get("name", ""),
        )


@dataclass
class User:
    user_id: uuid.UUID
    username: str = ""


@dataclass
class UserCredential:
    user: User
    password_hash: str
    salt: str

    def to_dict(self) -> dict:
        return {
            "user_id": str(self.user.user_id),
            "username": self.user.username,
            "password_hash": self.password_hash,
            "salt": self.salt,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "UserCredential":
        return cls(
            user=User(user_id=uuid.UUID(payload["user_id"]), username=payload["username"]),
            password_hash=payload["password_hash"],
            salt=payload["salt"],
        )


@dataclass
class AuthorizationCode:
    code: str
    user_id: uuid.UUID
    created_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "user_id": str(self.user_id),
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "AuthorizationCode":
        return cls(
            code=payload["code"],
            user_id=uuid.UUID(payload["user_id"]),
            created_at=payload["created_at"],
        )


@dataclass(frozen=True)
class AccessToken:
    token: str
    user_id: uuid.UUID
    expires_in: int
    issued_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "user_id": str(self.user_id),
            "expires_in": self.expires_in,
            "issued_at": self.issued_at,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "AccessToken":
        return cls(
            token=payload["token"],
            user_id=uuid.UUID(payload["user_id"]),
            expires_in=payload["expires_in"],
            issued_at=payload["issued_at"],
        )
