"""
Abstract store interface for data access.

Repositories and services depend on this contract; SqliteStore and
JsonFileStore are the concrete backends.
"""

from abc import ABC, abstractmethod

PLAYERS = "players"
MATCHES = "matches"
ANNOUNCEMENTS = "announcements"
USERS = "users"

RECORD_KINDS = {
    PLAYERS: "player",
    MATCHES: "match",
    ANNOUNCEMENTS: "announcement",
    USERS: "user",
}


class IStore(ABC):
    """
    Document store over named collections.

    Records are flat dicts. Every returned record carries its canonical
    string id under "id".
    """

    @abstractmethod
    def create(self, collection: str, record: dict) -> str:
        """Insert a record under a newly generated id and return that id."""
        ...

    @abstractmethod
    def put(self, collection: str, record_id: str, record: dict) -> None:
        """Insert or replace a record under a caller-chosen id."""
        ...

    @abstractmethod
    def get(self, collection: str, record_id: str) -> dict | None: ...

    @abstractmethod
    def update(self, collection: str, record_id: str, partial: dict) -> None:
        """Merge fields into an existing record.

        Raises:
            NotFoundError: If no record has this id
        """
        ...

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> None: ...

    @abstractmethod
    def query(self, collection: str, field: str, value) -> list[dict]: ...

    @abstractmethod
    def list_all(self, collection: str, order_by: str | None = None) -> list[dict]:
        """All records in insertion order, or ascending by a field when given."""
        ...

    @abstractmethod
    def clear(self, collection: str) -> int:
        """Delete every record in a collection and return how many were removed."""
        ...
