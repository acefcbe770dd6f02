"""
Single-file JSON store, the local-storage flavoured backend.

The whole file is a key/value map ("ttc_players" -> list of records, ...)
that is read once and rewritten after every mutation.
"""

import json
import logging
import os
import uuid
from pathlib import Path

from domain.errors import NotFoundError, StoreError
from infrastructure.schema_manager import COLLECTIONS
from repositories.interfaces import RECORD_KINDS, IStore
from repositories.sqlite_store import field_matches, sort_records

logger = logging.getLogger("ttclub.repositories.json_store")

KEY_PREFIX = "ttc_"


class JsonFileStore(IStore):
    def __init__(self, path: str):
        self.path = Path(path)
        self._data: dict[str, list[dict]] = self._load()

    def _key(self, collection: str) -> str:
        if collection not in COLLECTIONS:
            raise StoreError(f"Unknown collection: {collection}")
        return f"{KEY_PREFIX}{collection}"

    def _load(self) -> dict[str, list[dict]]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(raw, dict):
            raise StoreError(f"{self.path} does not contain a JSON object")
        logger.info(f"Loaded JSON store: {self.path}")
        return raw

    def _save(self) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(self._data, fh, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreError(f"Failed to write {self.path}: {e}") from e

    def _records(self, collection: str) -> list[dict]:
        return self._data.setdefault(self._key(collection), [])

    def _find(self, collection: str, record_id) -> dict | None:
        for record in self._records(collection):
            if field_matches(record.get("id"), record_id):
                return record
        return None

    def create(self, collection: str, record: dict) -> str:
        record_id = uuid.uuid4().hex
        stored = dict(record)
        stored["id"] = record_id
        self._records(collection).append(stored)
        self._save()
        return record_id

    def put(self, collection: str, record_id: str, record: dict) -> None:
        stored = dict(record)
        stored["id"] = str(record_id)
        existing = self._find(collection, record_id)
        if existing is not None:
            existing.clear()
            existing.update(stored)
        else:
            self._records(collection).append(stored)
        self._save()

    def get(self, collection: str, record_id: str) -> dict | None:
        record = self._find(collection, record_id)
        return json.loads(json.dumps(record)) if record is not None else None

    def update(self, collection: str, record_id: str, partial: dict) -> None:
        record = self._find(collection, record_id)
        if record is None:
            raise NotFoundError(RECORD_KINDS[collection], record_id)
        record.update({k: v for k, v in partial.items() if k != "id"})
        self._save()

    def delete(self, collection: str, record_id: str) -> None:
        records = self._records(collection)
        remaining = [r for r in records if not field_matches(r.get("id"), record_id)]
        if len(remaining) != len(records):
            self._data[self._key(collection)] = remaining
            self._save()

    def query(self, collection: str, field: str, value) -> list[dict]:
        return [r for r in self.list_all(collection) if field_matches(r.get(field), value)]

    def list_all(self, collection: str, order_by: str | None = None) -> list[dict]:
        # Deep copies so callers cannot mutate the backing data
        records = json.loads(json.dumps(self._records(collection)))
        return sort_records(records, order_by)

    def clear(self, collection: str) -> int:
        removed = len(self._records(collection))
        self._data[self._key(collection)] = []
        self._save()
        return removed
