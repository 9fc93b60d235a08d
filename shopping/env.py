from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from .constants import AUTH_MODE, LOGGER

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_csv_env(key: str) -> set[str]:
    raw = os.getenv(key, "")
    if not raw.strip():
        return set()
    return {item.strip() for item in raw.split(",") if item.strip()}


def _get_env_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be an integer value.")


def load_env() -> None:
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if not env_path.exists():
        return
    load_dotenv(env_path, override=True)


def get_public_url() -> str:
    raw = os.getenv("SHOPPING_PUBLIC_URL", "").strip()
    try:
        _URL_ADAPTER.validate_python(raw)
    except ValidationError as error:
        raise RuntimeError(
            "SHOPPING_PUBLIC_URL must be a valid HTTP(S) URL (for example: "
            "https://shopping.example.com)."
        ) from error
    return raw.rstrip("/")


def get_data_dir() -> Path | None:
    raw = os.getenv("SHOPPING_DATA_DIR", "").strip()
    if not raw:
        return None
    return Path(raw)


def password_grant_enabled() -> bool:
    return is_truthy(os.getenv("SHOPPING_ENABLE_PASSWORD_GRANT", "0"))


def validate_env() -> None:
    required = ("SHOPPING_PUBLIC_URL",)
    missing = [key for key in required if not os.getenv(key, "").strip()]
    if missing:
        raise RuntimeError(
            f"Missing required environment variables for {AUTH_MODE}: {', '.join(missing)}"
        )

    get_public_url()
    _get_env_int("SHOPPING_PORT", 8000)

    data_dir = get_data_dir()
    if data_dir is not None and data_dir.exists() and not data_dir.is_dir():
        raise RuntimeError(f"SHOPPING_DATA_DIR is not a directory: {data_dir}")

    if password_grant_enabled():
        LOGGER.warning(
            "SHOPPING_ENABLE_PASSWORD_GRANT is on; resource owner passwords are accepted "
            "at the token endpoint."
        )


def setup_logging() -> bool:
    debug_enabled = is_truthy(os.getenv("SHOPPING_DEBUG", "1"))
    if debug_enabled:
        logging.basicConfig(level=logging.INFO)
        logging.getLogger("shopping").setLevel(logging.INFO)
    return debug_enabled
