"""
Tests for JSON export/import of the club dataset.
"""

import pytest

from app import ClubApp
from repositories.sqlite_store import SqliteStore
from services.events import DATA_LOADED


@pytest.fixture
def club(tmp_path):
    app = ClubApp(SqliteStore(str(tmp_path / "source.db")))
    app.load()
    a = app.player_service.add_player("Alice", username="alice", password="pw")
    b = app.player_service.add_player("Bob")
    app.match_service.record_match(a.id, b.id, 11, 8, a.id, "2026-10-01")
    app.match_service.record_match(a.id, b.id, 9, 11, b.id, "2026-10-02")
    app.announcement_service.create("Welcome", "Season starts")
    return app


def test_export_contains_all_collections(club):
    payload = club.backup_service.export_data()

    assert len(payload["players"]) == 2
    assert len(payload["matches"]) == 2
    assert len(payload["announcements"]) == 1
    assert {u["username"] for u in payload["users"]} == {"admin", "alice"}
    assert payload["exported_at"]


def test_export_player_data_drops_admin(club):
    payload = club.backup_service.export_player_data()
    assert [u["username"] for u in payload["users"]] == ["alice"]


def test_import_into_fresh_store_rebuilds_stats(club, tmp_path):
    payload = club.backup_service.export_data()
    # Drifted stats in the export must not survive the import
    payload["players"][0]["wins"] = 42

    target = ClubApp(SqliteStore(str(tmp_path / "target.db")))
    target.load()
    loaded = []
    target.events.subscribe(DATA_LOADED, lambda **_: loaded.append(True))

    report = target.backup_service.import_data(payload)

    assert report.applied == 2
    assert loaded == [True]
    players = {p.name: p for p in target.player_service.get_players()}
    assert (players["Alice"].wins, players["Alice"].losses) == (1, 1)
    assert (players["Bob"].wins, players["Bob"].losses) == (1, 1)
    assert players["Alice"].current_streak == -1
    assert players["Bob"].current_streak == 1
    assert len(target.match_service.get_matches()) == 2
    assert target.auth_service.authenticate("alice", "pw") is not None
    assert [a.title for a in target.announcement_service.list_all()] == ["Welcome"]


def test_import_merges_users(club, tmp_path):
    target = ClubApp(SqliteStore(str(tmp_path / "target.db")))
    target.load()
    target.user_repo.create("carol", None, "pw")

    target.backup_service.import_data({"users": club.backup_service.export_player_data()["users"]}, merge_users=True)

    assert {u["username"] for u in target.user_repo.get_all()} == {"admin", "alice", "carol"}


def test_import_rejects_non_object(club):
    with pytest.raises(ValueError):
        club.backup_service.import_data(["not", "a", "dict"])
