import pytest

import server


@pytest.fixture
def configured_env(monkeypatch):
    monkeypatch.setattr(server, "load_env", lambda: None)
    monkeypatch.setattr(server, "setup_logging", lambda: False)
    monkeypatch.setenv("SHOPPING_PUBLIC_URL", "https://shopping.example.com")
    monkeypatch.delenv("SHOPPING_DATA_DIR", raising=False)
    monkeypatch.delenv("SHOPPING_ENABLE_PASSWORD_GRANT", raising=False)
    monkeypatch.delenv("SHOPPING_PORT", raising=False)
    monkeypatch.delenv("SHOPPING_CORS_ORIGINS", raising=False)
    return monkeypatch
