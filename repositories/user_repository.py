"""
Repository for login accounts.
"""

import datetime
import logging

from domain.models.player import normalize_id
from repositories.interfaces import USERS, IStore

logger = logging.getLogger("ttclub.repositories.user")

ROLE_ADMIN = "admin"
ROLE_PLAYER = "player"


class UserRepository:
    """Accounts keyed by username. Reads go straight to the store."""

    def __init__(self, store: IStore):
        self.store = store

    def create(
        self,
        username: str,
        email: str | None,
        password: str,
        role: str = ROLE_PLAYER,
        player_id: str | None = None,
    ) -> dict:
        record = {
            "username": username,
            "email": email,
            "password": password,
            "role": role,
            "player_id": normalize_id(player_id),
            "created_at": datetime.datetime.now().isoformat(timespec="seconds"),
        }
        self.store.put(USERS, username, record)
        logger.info(f"Saved {role} account '{username}'")
        return {"id": username, **record}

    def get(self, username: str) -> dict | None:
        if not username:
            return None
        matches = self.store.query(USERS, "username", username)
        return matches[0] if matches else None

    def exists(self, username: str) -> bool:
        return self.get(username) is not None

    def get_all(self) -> list[dict]:
        return self.store.list_all(USERS, order_by="username")

    def delete_for_player(self, player_id) -> int:
        """Remove accounts linked to a player and return how many were removed."""
        linked = self.store.query(USERS, "player_id", normalize_id(player_id))
        for user in linked:
            self.store.delete(USERS, user["id"])
        return len(linked)

    def replace_all(self, users: list[dict]) -> int:
        self.store.clear(USERS)
        for user in users:
            self.store.put(USERS, user.get("id") or user["username"], user)
        return len(users)
