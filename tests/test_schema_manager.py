import os
import sqlite3
import tempfile

from infrastructure.schema_manager import SchemaManager


def test_schema_manager_initializes_tables():
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    try:
        mgr = SchemaManager(db_path)
        mgr.initialize()

        with sqlite3.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in cursor.fetchall()}

        required = {
            "players",
            "matches",
            "announcements",
            "users",
            "schema_migrations",
        }
        assert required.issubset(tables)
    finally:
        try:
            os.unlink(db_path)
        except OSError:
            pass


def test_schema_manager_is_idempotent(tmp_path):
    db_path = str(tmp_path / "schema.db")
    SchemaManager(db_path).initialize()
    SchemaManager(db_path).initialize()

    with sqlite3.connect(db_path) as conn:
        applied = [row[0] for row in conn.execute("SELECT name FROM schema_migrations")]
        columns = {row[1] for row in conn.execute("PRAGMA table_info(players)")}

    assert applied == ["add_updated_at_columns"]
    assert {"id", "data", "created_at", "updated_at"} <= columns
