import uuid

import pytest

from authentication.models import AccessToken
from authentication.token_store import FileAccessTokenStore, MemoryAccessTokenStore


def _token(value: str = "token-1") -> AccessToken:
    return AccessToken(token=value, user_id=uuid.uuid4(), expires_in=3600, issued_at=1234.0)


@pytest.mark.asyncio
async def test_memory_store_insert_get() -> None:
    store = MemoryAccessTokenStore()
    token = _token()

    await store.insert(token)

    assert await store.get("token-1") == token


@pytest.mark.asyncio
async def test_memory_store_get_missing() -> None:
    store = MemoryAccessTokenStore()

    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_memory_store_rejects_duplicate() -> None:
    store = MemoryAccessTokenStore()
    await store.insert(_token())

    with pytest.raises(RuntimeError):
        await store.insert(_token())
    assert len(store) == 1


@pytest.mark.asyncio
async def test_file_store_insert_get(tmp_path) -> None:
    store = FileAccessTokenStore(tmp_path / "tokens.json")
    token = _token()

    await store.insert(token)

    assert await store.get("token-1") == token


@pytest.mark.asyncio
async def test_file_store_persists(tmp_path) -> None:
    path = tmp_path / "tokens.json"
    token = _token()
    await FileAccessTokenStore(path).insert(token)

    assert await FileAccessTokenStore(path).get("token-1") == token


@pytest.mark.asyncio
async def test_file_store_rejects_duplicate(tmp_path) -> None:
    store = FileAccessTokenStore(tmp_path / "tokens.json")
    await store.insert(_token())

    with pytest.raises(RuntimeError):
        await store.insert(_token())


@pytest.mark.asyncio
async def test_file_store_missing_file(tmp_path) -> None:
    store = FileAccessTokenStore(tmp_path / "missing.json")

    assert await store.get("token-1") is None
