"""OAuth2 token endpoint error taxonomy.

Every client-caused failure is an :class:`OAuthError` carrying the RFC 6749
error code that goes on the wire. ``detail`` is a developer-readable message
for the server log; it never replaces ``description`` in the response body.
"""

from __future__ import annotations

INVALID_CLIENT_DESCRIPTION = (
    "Client authentication failed (e.g., unknown client, no client "
    "authentication included, or unsupported authentication method)."
)
INVALID_USER_CREDENTIALS_DESCRIPTION = "invalid username or password"


class OAuthError(Exception):
    error_code = "invalid_request"
    status_code = 400

    def __init__(self, description: str, *, detail: str | None = None) -> None:
        super().__init__(description)
        self.description = description
        self.detail = detail or description

    def to_payload(self) -> dict:
        return {"error": self.error_code, "error_description": self.description}


class InvalidRequest(OAuthError):
    error_code = "invalid_request"


class ClientAuthenticationError(OAuthError):
    error_code = "invalid_client"

    def __init__(self, detail: str) -> None:
        super().__init__(INVALID_CLIENT_DESCRIPTION, detail=detail)


class UnknownClient(ClientAuthenticationError):
    def __init__(self, client_id: str) -> None:
        super().__init__(f"Unknown client: {client_id}")
        self.client_id = client_id


class MissingClientSecret(ClientAuthenticationError):
    def __init__(self, client_id: str) -> None:
        super().__init__(f"Missing client secret for client: {client_id}")
        self.client_id = client_id


class InvalidClientSecret(ClientAuthenticationError):
    def __init__(self, client_id: str) -> None:
        super().__init__(f"Invalid client secret for client: {client_id}")
        self.client_id = client_id


class InvalidGrant(OAuthError):
    error_code = "invalid_grant"


class InvalidAuthorizationCode(InvalidGrant):
    def __init__(self, code: str) -> None:
        super().__init__(f"Invalid authorization code: {code}")
        self.code = code


class GrantTypeNotImplemented(OAuthError):
    error_code = "unsupported_grant_type"

    def __init__(self, grant_type: str) -> None:
        super().__init__(f"Grant type not implemented: {grant_type}")
        self.grant_type = grant_type


class InfrastructureFailure(RuntimeError):
    """A backing store failed; surfaced as a server error, never as a client error."""

    error_code = "server_error"
    status_code = 500

    def to_payload(self) -> dict:
        return {"error": self.error_code, "error_description": "The server could not issue a token."}
