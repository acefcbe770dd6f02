"""
SQLite-backed document store.
"""

import json
import logging
import sqlite3
import uuid

from domain.errors import NotFoundError, StoreError
from infrastructure.schema_manager import COLLECTIONS
from repositories.base_repository import BaseRepository
from repositories.interfaces import RECORD_KINDS, IStore

logger = logging.getLogger("ttclub.repositories.sqlite_store")


def field_matches(record_value, value) -> bool:
    """Equality that treats 7 and "7" as the same id."""
    if record_value == value:
        return True
    if record_value is None or value is None:
        return False
    return str(record_value) == str(value)


def sort_records(records: list[dict], order_by: str | None) -> list[dict]:
    if not order_by:
        return records
    # Records missing the field sort first
    return sorted(
        records,
        key=lambda r: (r.get(order_by) is not None, r.get(order_by) if r.get(order_by) is not None else 0),
    )


class SqliteStore(BaseRepository, IStore):
    """
    Stores each collection as a table of JSON documents.

    Responsibilities:
    - Id generation for new records
    - Partial updates merged into the stored document
    - Translating sqlite failures into StoreError
    """

    def _check_collection(self, collection: str) -> None:
        if collection not in COLLECTIONS:
            raise StoreError(f"Unknown collection: {collection}")

    def _row_to_record(self, row) -> dict:
        record = json.loads(row["data"])
        record["id"] = row["id"]
        return record

    def create(self, collection: str, record: dict) -> str:
        self._check_collection(collection)
        record_id = uuid.uuid4().hex
        payload = {k: v for k, v in record.items() if k != "id"}
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"INSERT INTO {collection} (id, data, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)",
                    (record_id, json.dumps(payload)),
                )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to create {collection} record: {e}") from e
        logger.debug(f"Created {collection}/{record_id}")
        return record_id

    def put(self, collection: str, record_id: str, record: dict) -> None:
        self._check_collection(collection)
        payload = {k: v for k, v in record.items() if k != "id"}
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"""
                    INSERT INTO {collection} (id, data, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(id) DO UPDATE SET
                        data = excluded.data,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (str(record_id), json.dumps(payload)),
                )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to write {collection}/{record_id}: {e}") from e

    def get(self, collection: str, record_id: str) -> dict | None:
        self._check_collection(collection)
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(f"SELECT id, data FROM {collection} WHERE id = ?", (str(record_id),))
                row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read {collection}/{record_id}: {e}") from e
        if not row:
            return None
        return self._row_to_record(row)

    def update(self, collection: str, record_id: str, partial: dict) -> None:
        self._check_collection(collection)
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(f"SELECT data FROM {collection} WHERE id = ?", (str(record_id),))
                row = cursor.fetchone()
                if not row:
                    raise NotFoundError(RECORD_KINDS[collection], record_id)
                data = json.loads(row["data"])
                data.update({k: v for k, v in partial.items() if k != "id"})
                cursor.execute(
                    f"UPDATE {collection} SET data = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (json.dumps(data), str(record_id)),
                )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to update {collection}/{record_id}: {e}") from e

    def delete(self, collection: str, record_id: str) -> None:
        self._check_collection(collection)
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(f"DELETE FROM {collection} WHERE id = ?", (str(record_id),))
        except sqlite3.Error as e:
            raise StoreError(f"Failed to delete {collection}/{record_id}: {e}") from e

    def query(self, collection: str, field: str, value) -> list[dict]:
        return [r for r in self.list_all(collection) if field_matches(r.get(field), value)]

    def list_all(self, collection: str, order_by: str | None = None) -> list[dict]:
        self._check_collection(collection)
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(f"SELECT id, data FROM {collection} ORDER BY rowid")
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to list {collection}: {e}") from e
        return sort_records([self._row_to_record(row) for row in rows], order_by)

    def clear(self, collection: str) -> int:
        self._check_collection(collection)
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(f"DELETE FROM {collection}")
                return cursor.rowcount
        except sqlite3.Error as e:
            raise StoreError(f"Failed to clear {collection}: {e}") from e
