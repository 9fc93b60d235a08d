from __future__ import annotations

import logging

LOGGER = logging.getLogger("shopping.app")
APP_VERSION = "0.1.0"
AUTH_MODE = "oauth2-token"

CLIENTS_FILE = "clients.json"
USERS_FILE = "users.json"
AUTHORIZATION_CODES_FILE = "authorization_codes.json"
ACCESS_TOKENS_FILE = "access_tokens.json"
