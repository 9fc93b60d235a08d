from starlette.testclient import TestClient

import server


def test_health_returns_200(configured_env) -> None:
    client = TestClient(server.create_app())

    response = client.get("/health")

    assert response.status_code == 200


def test_health_response_format(configured_env) -> None:
    client = TestClient(server.create_app())

    payload = client.get("/health").json()

    assert payload["status"] == "ok"
    assert payload["version"] == "0.1.0"
    assert payload["auth_mode"] == "oauth2-token"
