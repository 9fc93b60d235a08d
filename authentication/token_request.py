from __future__ import annotations

import base64
import binascii
import urllib.parse
from dataclasses import dataclass
from typing import Iterable

from authentication.errors import InvalidRequest

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

TOKEN_REQUEST_PARAMS = (
    "grant_type",
    "client_id",
    "client_secret",
    "code",
    "username",
    "password",
    "refresh_token",
)


@dataclass
class TokenRequest:
    grant_type: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    code: str | None = None
    username: str | None = None
    password: str | None = None
    refresh_token: str | None = None


def is_form_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == FORM_CONTENT_TYPE


def parse_token_request(
    items: Iterable[tuple[str, str]],
    *,
    authorization_header: str | None = None,
) -> TokenRequest:
    """Build a :class:`TokenRequest` from form items and an optional Basic header.

    Raises :class:`InvalidRequest` for repeated parameters, a missing
    ``grant_type`` or malformed Basic credentials.
    """
    values: dict[str, str] = {}
    for key, value in items:
        if key not in TOKEN_REQUEST_PARAMS:
            continue
        if key in values:
            raise InvalidRequest(f"Parameter {key} must not be repeated.")
        values[key] = value

    if not values.get("grant_type", "").strip():
        raise InvalidRequest("Missing grant_type parameter value.")

    basic = extract_basic_credentials(authorization_header)
    if basic is not None:
        values["client_id"], values["client_secret"] = basic

    return TokenRequest(**values)


def extract_basic_credentials(authorization_header: str | None) -> tuple[str, str] | None:
    if not authorization_header:
        return None
    scheme, _, raw = authorization_header.partition(" ")
    if scheme.lower() != "basic":
        return None

    try:
        decoded = base64.b64decode(raw.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise InvalidRequest("Malformed Basic authorization header.")

    if ":" not in decoded:
        raise InvalidRequest("Malformed Basic authorization header.")
    client_id, client_secret = decoded.split(":", 1)
    return urllib.parse.unquote_plus(client_id), urllib.parse.unquote_plus(client_secret)
