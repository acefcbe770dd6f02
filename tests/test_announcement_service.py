import pytest

from domain.errors import NotFoundError
from repositories.announcement_repository import AnnouncementRepository
from repositories.sqlite_store import SqliteStore
from services.announcement_service import AnnouncementService


@pytest.fixture
def board(tmp_path):
    return AnnouncementService(AnnouncementRepository(SqliteStore(str(tmp_path / "test_board.db"))))


def test_create_and_get(board):
    posted = board.create("Club night", "Friday 7pm", created_by="admin")

    fetched = board.get(posted.id)

    assert fetched.title == "Club night"
    assert fetched.is_active is True
    assert fetched.created_by == "admin"
    assert fetched.created_at


def test_list_active_filters_and_orders(board):
    low = board.create("Low", "x", priority="low")
    high = board.create("High", "x", priority="high")
    expired = board.create("Old", "x", expires_at="2026-01-01T00:00:00")
    hidden = board.create("Hidden", "x")
    board.deactivate(hidden.id)
    normal = board.create("Normal", "x", expires_at="2099-01-01T00:00:00")

    active = board.list_active(now="2026-10-19T12:00:00")

    assert [a.id for a in active] == [high.id, normal.id, low.id]
    assert expired.id not in {a.id for a in active}


def test_update_ignores_unknown_fields(board):
    posted = board.create("Typo", "x")

    updated = board.update(posted.id, {"title": "Fixed", "created_by": "mallory"})

    assert updated.title == "Fixed"
    assert updated.created_by is None


def test_delete(board):
    posted = board.create("Bye", "x")

    board.delete(posted.id)

    with pytest.raises(NotFoundError):
        board.get(posted.id)
    with pytest.raises(NotFoundError):
        board.delete(posted.id)


def test_update_unknown(board):
    with pytest.raises(NotFoundError):
        board.update("missing", {"title": "x"})
