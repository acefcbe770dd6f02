"""
Shared SQLite connection handling for repositories.
"""

import logging
import sqlite3
import uuid
from contextlib import contextmanager

from infrastructure.schema_manager import SchemaManager

logger = logging.getLogger("ttclub.repositories.base")


class BaseRepository:
    """
    Owns the SQLite connection settings for a database file.

    Passing ":memory:" creates a private shared-cache in-memory database whose
    single connection is kept open for the lifetime of the repository.
    """

    def __init__(self, db_path: str):
        self._is_memory = db_path == ":memory:"
        self._memory_connection: sqlite3.Connection | None = None
        self._use_uri = False

        if self._is_memory:
            unique_name = uuid.uuid4().hex
            self.db_path = f"file:memdb_{unique_name}?mode=memory&cache=shared"
            self._use_uri = True
            # Hold the database open; shared-cache memory dbs vanish with their last connection
            self.get_connection()
        else:
            self.db_path = db_path

        SchemaManager(self.db_path, use_uri=self._use_uri).initialize()

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def get_connection(self) -> sqlite3.Connection:
        """A connection with name-addressable rows; the same one every time for in-memory stores."""
        if not self._is_memory:
            return self._open()
        if self._memory_connection is None:
            self._memory_connection = self._open()
        return self._memory_connection

    @contextmanager
    def connection(self):
        """
        Yield a connection for one unit of work.

        The work is committed when the block exits cleanly and rolled back if
        it raises. File-backed connections are closed afterwards; the held
        in-memory connection stays open.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            if not self._is_memory:
                conn.close()
