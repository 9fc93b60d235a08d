import server


class _DummyUvicorn:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def run(self, app, **kwargs) -> None:
        self.calls.append({"app": app, **kwargs})


def test_main_uses_local_defaults(monkeypatch) -> None:
    dummy = _DummyUvicorn()
    sentinel = object()
    monkeypatch.setattr(server, "create_app", lambda: sentinel)
    monkeypatch.setattr(server, "uvicorn", dummy)
    monkeypatch.delenv("SHOPPING_HOST", raising=False)
    monkeypatch.delenv("SHOPPING_PORT", raising=False)

    server.main()

    assert dummy.calls == [{"app": sentinel, "host": "127.0.0.1", "port": 8000}]


def test_main_reads_host_and_port_from_env(monkeypatch) -> None:
    dummy = _DummyUvicorn()
    sentinel = object()
    monkeypatch.setattr(server, "create_app", lambda: sentinel)
    monkeypatch.setattr(server, "uvicorn", dummy)
    monkeypatch.setenv("SHOPPING_HOST", "0.0.0.0")
    monkeypatch.setenv("SHOPPING_PORT", "9100")

    server.main()

    assert dummy.calls == [{"app": sentinel, "host": "0.0.0.0", "port": 9100}]
