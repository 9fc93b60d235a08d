import uuid

import pytest

from authentication.client_auth import ClientAuthenticator, parse_client_id
from authentication.client_registry import ClientRegistry
from authentication.errors import (
    ClientAuthenticationError,
    InvalidClientSecret,
    InvalidRequest,
    MissingClientSecret,
    UnknownClient,
)


def _authenticator() -> tuple[ClientAuthenticator, str, str]:
    registry = ClientRegistry()
    client, secret = registry.register("Shopping web")
    return ClientAuthenticator(registry), str(client.client_id), secret


@pytest.mark.asyncio
async def test_valid_secret_authenticates() -> None:
    authenticator, client_id, secret = _authenticator()

    client = await authenticator.authenticate(client_id, secret)

    assert str(client.client_id) == client_id


@pytest.mark.asyncio
async def test_wrong_secret_is_invalid_client_secret() -> None:
    authenticator, client_id, secret = _authenticator()

    with pytest.raises(InvalidClientSecret):
        await authenticator.authenticate(client_id, secret + "x")


@pytest.mark.asyncio
async def test_unknown_client() -> None:
    authenticator, _, secret = _authenticator()

    with pytest.raises(UnknownClient):
        await authenticator.authenticate(str(uuid.uuid4()), secret)


@pytest.mark.asyncio
@pytest.mark.parametrize("secret", [None, "", "   "])
async def test_blank_secret_is_missing_client_secret(secret) -> None:
    authenticator, client_id, _ = _authenticator()

    with pytest.raises(MissingClientSecret):
        await authenticator.authenticate(client_id, secret)


@pytest.mark.asyncio
async def test_blank_secret_checked_before_hashing(monkeypatch) -> None:
    authenticator, client_id, _ = _authenticator()

    def _fail(*args):
        raise AssertionError("secret should not be hashed")

    monkeypatch.setattr("authentication.client_auth.verify_secret", _fail)

    with pytest.raises(MissingClientSecret):
        await authenticator.authenticate(client_id, "")


@pytest.mark.asyncio
@pytest.mark.parametrize("client_id", [None, "", "not-a-uuid"])
async def test_malformed_client_id_is_invalid_request(client_id) -> None:
    authenticator, _, secret = _authenticator()

    with pytest.raises(InvalidRequest):
        await authenticator.authenticate(client_id, secret)


def test_client_failures_map_to_invalid_client() -> None:
    for error in (UnknownClient("c"), MissingClientSecret("c"), InvalidClientSecret("c")):
        assert isinstance(error, ClientAuthenticationError)
        assert error.to_payload()["error"] == "invalid_client"
        assert "c" in error.detail
        assert "c" not in error.to_payload()["error_description"].split()


def test_parse_client_id_strips_whitespace() -> None:
    client_id = uuid.uuid4()

    assert parse_client_id(f" {client_id} ") == client_id
