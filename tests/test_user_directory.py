import pytest

from authentication.user_directory import UserDirectory


def test_register_and_verify() -> None:
    directory = UserDirectory()

    user = directory.register("alice", "correct horse")

    assert directory.verify("alice", "correct horse") == user
    assert directory.get("alice") == user


def test_verify_wrong_password() -> None:
    directory = UserDirectory()
    directory.register("alice", "correct horse")

    assert directory.verify("alice", "battery staple") is None


def test_verify_unknown_user() -> None:
    assert UserDirectory().verify("bob", "anything") is None


def test_register_duplicate_username() -> None:
    directory = UserDirectory()
    directory.register("alice", "one")

    with pytest.raises(ValueError):
        directory.register("alice", "two")


def test_register_blank_username() -> None:
    with pytest.raises(ValueError):
        UserDirectory().register("  ", "secret")


def test_file_directory_persists(tmp_path) -> None:
    path = tmp_path / "users.json"
    user = UserDirectory(path).register("alice", "correct horse")

    reloaded = UserDirectory(path)

    assert reloaded.verify("alice", "correct horse") == user
    assert "correct horse" not in path.read_text(encoding="utf-8")
