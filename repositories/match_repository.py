"""
Repository for match data access.
"""

import logging

from domain.models.match import Match
from domain.models.player import normalize_id
from repositories.interfaces import MATCHES, IStore

logger = logging.getLogger("ttclub.repositories.match")


class MatchRepository:
    """
    Owns the in-memory match ledger and mirrors it to the store.

    The cache keeps store insertion order, which is the order history
    replay applies results in.
    """

    def __init__(self, store: IStore):
        self.store = store
        self._matches: list[Match] = []

    def load(self) -> list[Match]:
        self._matches = [Match.from_record(r) for r in self.store.list_all(MATCHES)]
        logger.info(f"Matches loaded from store: {len(self._matches)}")
        return self.get_all()

    def add(self, match: Match) -> Match:
        match.id = self.store.create(MATCHES, match.to_record())
        self._matches.append(match)
        return match

    def get_by_id(self, match_id) -> Match | None:
        mid = normalize_id(match_id)
        for match in self._matches:
            if match.id == mid:
                return match
        return None

    def get_all(self) -> list[Match]:
        """Matches ordered newest first by match_date."""
        return sorted(self._matches, key=lambda m: m.match_date, reverse=True)

    def get_in_stored_order(self) -> list[Match]:
        return list(self._matches)

    def get_for_player(self, player_id) -> list[Match]:
        return [m for m in self.get_all() if m.involves(player_id)]

    def delete(self, match_id) -> bool:
        match = self.get_by_id(match_id)
        if match is None:
            return False
        self.store.delete(MATCHES, match.id)
        self._matches = [m for m in self._matches if m.id != match.id]
        return True

    def delete_involving(self, player_id) -> list[Match]:
        """Remove every match where the player is player1, player2 or winner."""
        removed = [m for m in self._matches if m.involves(player_id)]
        for match in removed:
            self.store.delete(MATCHES, match.id)
        removed_ids = {m.id for m in removed}
        self._matches = [m for m in self._matches if m.id not in removed_ids]
        if removed:
            logger.info(f"Removed {len(removed)} matches involving player {player_id}")
        return removed

    def clear(self) -> int:
        count = self.store.clear(MATCHES)
        self._matches = []
        return count

    def replace_all(self, records: list[dict]) -> int:
        self.store.clear(MATCHES)
        for record in records:
            match = Match.from_record(record)
            if match.id is None:
                self.store.create(MATCHES, match.to_record())
            else:
                self.store.put(MATCHES, match.id, match.to_record())
        self.load()
        return len(self._matches)
