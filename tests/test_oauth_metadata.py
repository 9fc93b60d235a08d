from authentication.user_directory import UserDirectory
from tests.oauth_helpers import _build_oauth_server


def test_metadata_endpoint_returns_json() -> None:
    _, test_client, _, _ = _build_oauth_server()

    response = test_client.get("/.well-known/oauth-authorization-server")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")


def test_metadata_uses_public_url() -> None:
    _, test_client, _, _ = _build_oauth_server()

    payload = test_client.get("/.well-known/oauth-authorization-server").json()

    assert payload["issuer"] == "https://shopping.example.com"
    assert payload["token_endpoint"] == "https://shopping.example.com/auth/token"


def test_metadata_lists_only_enabled_grants() -> None:
    _, test_client, _, _ = _build_oauth_server()

    payload = test_client.get("/.well-known/oauth-authorization-server").json()

    assert payload["grant_types_supported"] == ["authorization_code"]
    assert payload["token_endpoint_auth_methods_supported"] == [
        "client_secret_basic",
        "client_secret_post",
    ]


def test_metadata_lists_password_grant_when_enabled() -> None:
    _, test_client, _, _ = _build_oauth_server(user_directory=UserDirectory())

    payload = test_client.get("/.well-known/oauth-authorization-server").json()

    assert "password" in payload["grant_types_supported"]


def test_metadata_does_not_advertise_authorization_endpoint() -> None:
    _, test_client, _, _ = _build_oauth_server()

    payload = test_client.get("/.well-known/oauth-authorization-server").json()

    assert "response_types_supported" not in payload
    assert "authorization_endpoint" not in payload
