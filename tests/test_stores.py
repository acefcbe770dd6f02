"""
Contract tests run against both store backends.
"""

import json

import pytest

from domain.errors import NotFoundError, StoreError
from repositories.json_store import JsonFileStore
from repositories.sqlite_store import SqliteStore


@pytest.fixture(params=["sqlite", "json", "memory"])
def store(request, tmp_path):
    if request.param == "sqlite":
        return SqliteStore(str(tmp_path / "store.db"))
    if request.param == "memory":
        return SqliteStore(":memory:")
    return JsonFileStore(str(tmp_path / "store.json"))


class TestStoreContract:
    def test_create_and_get(self, store):
        record_id = store.create("players", {"name": "Alice", "wins": 2})

        record = store.get("players", record_id)

        assert isinstance(record_id, str)
        assert record == {"id": record_id, "name": "Alice", "wins": 2}

    def test_get_missing(self, store):
        assert store.get("players", "nope") is None

    def test_update_merges_fields(self, store):
        record_id = store.create("players", {"name": "Alice", "wins": 2})

        store.update("players", record_id, {"wins": 3, "losses": 1})

        assert store.get("players", record_id) == {
            "id": record_id,
            "name": "Alice",
            "wins": 3,
            "losses": 1,
        }

    def test_update_missing_raises(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.update("matches", "nope", {"winner_id": "x"})
        assert exc_info.value.kind == "match"

    def test_put_upserts_with_chosen_id(self, store):
        store.put("users", "alice", {"username": "alice", "role": "player"})
        store.put("users", "alice", {"username": "alice", "role": "admin"})

        assert store.get("users", "alice") == {"id": "alice", "username": "alice", "role": "admin"}
        assert len(store.list_all("users")) == 1

    def test_delete(self, store):
        record_id = store.create("matches", {"winner_id": "a"})
        store.delete("matches", record_id)
        store.delete("matches", record_id)
        assert store.get("matches", record_id) is None

    def test_list_all_keeps_insertion_order(self, store):
        ids = [store.create("matches", {"match_date": d}) for d in ("2026-10-03", "2026-10-01", "2026-10-02")]

        assert [r["id"] for r in store.list_all("matches")] == ids

    def test_list_all_ordered_by_field(self, store):
        for d in ("2026-10-03", "2026-10-01", "2026-10-02"):
            store.create("matches", {"match_date": d})

        dates = [r["match_date"] for r in store.list_all("matches", order_by="match_date")]

        assert dates == ["2026-10-01", "2026-10-02", "2026-10-03"]

    def test_query_is_type_tolerant(self, store):
        store.create("users", {"username": "alice", "player_id": "7"})
        store.create("users", {"username": "bob", "player_id": "8"})

        assert [u["username"] for u in store.query("users", "player_id", 7)] == ["alice"]

    def test_clear(self, store):
        store.create("announcements", {"title": "a"})
        store.create("announcements", {"title": "b"})

        assert store.clear("announcements") == 2
        assert store.list_all("announcements") == []

    def test_unknown_collection(self, store):
        with pytest.raises(StoreError):
            store.create("courts", {"name": "1"})


class TestJsonFileStore:
    def test_data_survives_reopen(self, tmp_path):
        path = tmp_path / "club.json"
        record_id = JsonFileStore(str(path)).create("players", {"name": "Alice"})

        reopened = JsonFileStore(str(path))

        assert reopened.get("players", record_id)["name"] == "Alice"
        assert "ttc_players" in json.loads(path.read_text())

    def test_corrupt_file_raises_store_error(self, tmp_path):
        path = tmp_path / "club.json"
        path.write_text("{not json")

        with pytest.raises(StoreError):
            JsonFileStore(str(path))

    def test_returned_records_are_copies(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "club.json"))
        record_id = store.create("players", {"name": "Alice", "attendance_history": {}})

        store.get("players", record_id)["attendance_history"]["2026-10-19"] = "Present"

        assert store.get("players", record_id)["attendance_history"] == {}


def test_sqlite_store_surfaces_sqlite_failures(tmp_path):
    store = SqliteStore(str(tmp_path / "store.db"))
    with store.connection() as conn:
        conn.execute("DROP TABLE players")

    with pytest.raises(StoreError):
        store.create("players", {"name": "Alice"})


@pytest.mark.parametrize("path", ["store.db", ":memory:"])
def test_sqlite_connection_rolls_back_failed_work(tmp_path, path):
    store = SqliteStore(path if path == ":memory:" else str(tmp_path / path))

    with pytest.raises(RuntimeError):
        with store.connection() as conn:
            conn.execute("INSERT INTO players (id, data) VALUES (?, ?)", ("p1", "{}"))
            raise RuntimeError("abort")

    assert store.get("players", "p1") is None
    record_id = store.create("players", {"name": "Alice"})
    assert store.get("players", record_id)["name"] == "Alice"
