from __future__ import annotations

import hashlib
import hmac
import secrets

HASH_ITERATIONS = 100_000


def generate_salt() -> str:
    return secrets.token_hex(16)


def generate_secret() -> str:
    return secrets.token_urlsafe(32)


def hash_secret(secret: str, salt: str) -> str:
    """Hash a client secret or user password with its per-record salt."""
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        secret.encode("utf-8"),
        salt.encode("utf-8"),
        HASH_ITERATIONS,
    )
    return digest.hex()


def verify_secret(presented: str, salt: str, expected_hash: str) -> bool:
    return hmac.compare_digest(hash_secret(presented, salt), expected_hash)
