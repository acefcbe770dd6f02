import pytest

import config
from repositories.sqlite_store import SqliteStore
from repositories.user_repository import UserRepository
from services.auth_service import AuthService


@pytest.fixture
def user_repo(tmp_path):
    return UserRepository(SqliteStore(str(tmp_path / "test_auth.db")))


@pytest.fixture
def auth(user_repo):
    return AuthService(user_repo)


def test_ensure_admin_exists_creates_once(auth, user_repo):
    assert auth.ensure_admin_exists() is True
    assert auth.ensure_admin_exists() is False

    admin = user_repo.get(config.ADMIN_USERNAME)
    assert admin["role"] == "admin"
    assert len(user_repo.get_all()) == 1


def test_authenticate(auth, user_repo):
    user_repo.create("alice", "alice@example.com", "secret", player_id="p1")

    session = auth.authenticate("alice", "secret")

    assert session == {
        "id": "alice",
        "username": "alice",
        "email": "alice@example.com",
        "role": "player",
        "player_id": "p1",
    }


def test_authenticate_rejects_bad_credentials(auth, user_repo):
    user_repo.create("alice", "alice@example.com", "secret")

    assert auth.authenticate("alice", "wrong") is None
    assert auth.authenticate("bob", "secret") is None
    assert auth.authenticate("", "") is None
