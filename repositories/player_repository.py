"""
Repository for the club roster.
"""

import datetime
import logging

from domain.errors import NotFoundError, ValidationError
from domain.models.player import PRESENT, Player, compute_win_rate, normalize_id
from repositories.interfaces import PLAYERS, IStore

logger = logging.getLogger("ttclub.repositories.player")

# Fields an administrative edit may touch
EDITABLE_FIELDS = {
    "name",
    "rank",
    "wins",
    "losses",
    "current_streak",
    "win_rate",
    "attendance_status",
    "last_seen",
    "attendance_history",
}

# Lowest value each integer field accepts; None means any sign
_INT_FIELD_MINIMUMS = {"wins": 0, "losses": 0, "rank": 1, "current_streak": None}


def _coerce_edit(changes: dict) -> dict:
    """Return a copy of an edit with numeric fields coerced, or raise ValidationError."""
    coerced = dict(changes)
    for key, minimum in _INT_FIELD_MINIMUMS.items():
        if key not in coerced:
            continue
        value = coerced[key]
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            raise ValidationError(ValidationError.INVALID_FIELD, f"{key} must be a whole number.") from None
        if isinstance(value, float) and value != number:
            raise ValidationError(ValidationError.INVALID_FIELD, f"{key} must be a whole number.")
        if minimum is not None and number < minimum:
            raise ValidationError(ValidationError.INVALID_FIELD, f"{key} must be at least {minimum}.")
        coerced[key] = number

    if "win_rate" in coerced:
        try:
            rate = float(coerced["win_rate"])
        except (TypeError, ValueError, OverflowError):
            raise ValidationError(ValidationError.INVALID_FIELD, "win_rate must be a number.") from None
        if not 0.0 <= rate <= 100.0:
            raise ValidationError(ValidationError.INVALID_FIELD, "win_rate must be between 0 and 100.")
        coerced["win_rate"] = rate

    if "name" in coerced:
        name = str(coerced["name"] or "").strip()
        if not name:
            raise ValidationError(ValidationError.MISSING_FIELDS, "A player needs a name.")
        coerced["name"] = name
    return coerced


class PlayerRepository:
    """
    Owns the in-memory player list and mirrors it to the store.

    Responsibilities:
    - CRUD operations for players
    - Rank insertion when a new player requests an occupied rank
    - Persisting derived stats after recomputation

    Reads are served from memory; call load() to refresh from the store.
    """

    def __init__(self, store: IStore):
        self.store = store
        self._players: list[Player] = []

    def load(self) -> list[Player]:
        """Replace the cache with the store's contents."""
        self._players = [Player.from_record(r) for r in self.store.list_all(PLAYERS)]
        logger.info(f"Players loaded from store: {len(self._players)}")
        return self.get_all()

    def add(self, name: str, rank: int | None = None, today: datetime.date | None = None) -> Player:
        """
        Register a new player.

        The requested rank is clamped to 1..N+1. Everyone at or below it moves
        down one place, so ranks stay dense.
        """
        today = today or datetime.date.today()
        rank = self._insertion_rank(rank)

        shifted = [p for p in self._players if p.rank >= rank]
        for p in shifted:
            p.rank += 1
            self.store.update(PLAYERS, p.id, {"rank": p.rank})

        player = Player(
            name=name,
            rank=rank,
            attendance_status=PRESENT,
            last_seen=today.isoformat(),
            created_at=datetime.datetime.now().isoformat(timespec="seconds"),
        )
        player.id = self.store.create(PLAYERS, player.to_record())
        self._players.append(player)
        logger.info(f"Added player {player.id} ({name}) at rank {rank}, shifted {len(shifted)}")
        return player

    def _insertion_rank(self, requested) -> int:
        last = len(self._players) + 1
        try:
            rank = int(requested)
        except (TypeError, ValueError, OverflowError):
            return last
        return min(max(rank, 1), last)

    def get_by_id(self, player_id) -> Player | None:
        """Get player by id; 7 and "7" refer to the same player."""
        pid = normalize_id(player_id)
        if pid is None:
            return None
        for player in self._players:
            if player.id == pid:
                return player
        return None

    def get_by_ids(self, player_ids: list) -> list[Player]:
        """
        Get multiple players by id.

        Returns players in the same order as the input ids; unknown ids are skipped.
        """
        players = []
        for pid in player_ids:
            player = self.get_by_id(pid)
            if player is None:
                logger.warning(f"Player not found: id={pid}")
                continue
            players.append(player)
        return players

    def get_all(self) -> list[Player]:
        """All players ordered by ascending rank."""
        return sorted(self._players, key=lambda p: p.rank)

    def exists(self, player_id) -> bool:
        return self.get_by_id(player_id) is not None

    def update(self, player_id, fields: dict) -> Player:
        """
        Merge fields into a player.

        Counts are coerced to int and checked before anything changes, so a
        rejected edit leaves the player untouched. win_rate is recomputed from
        wins/losses unless explicitly supplied. A new rank moves the player to
        that place and shifts everyone in between, keeping ranks dense.

        Raises:
            NotFoundError: If no player has this id
            ValidationError: If a count is not a whole number or is out of range
        """
        player = self.get_by_id(player_id)
        if player is None:
            raise NotFoundError("player", player_id)

        changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        ignored = set(fields) - EDITABLE_FIELDS
        if ignored:
            logger.debug(f"Ignoring non-editable player fields: {sorted(ignored)}")
        changes = _coerce_edit(changes)
        new_rank = changes.pop("rank", None)

        for key, value in changes.items():
            setattr(player, key, value)
        if "win_rate" not in changes:
            player.win_rate = compute_win_rate(player.wins, player.losses)
            changes["win_rate"] = player.win_rate

        self.store.update(PLAYERS, player.id, changes)
        if new_rank is not None:
            self._move_to_rank(player, new_rank)
        return player

    def _move_to_rank(self, player: Player, rank: int) -> None:
        others = [p for p in self.get_all() if p is not player]
        rank = min(rank, len(others) + 1)
        others.insert(rank - 1, player)
        for index, p in enumerate(others, start=1):
            if p.rank != index:
                p.rank = index
                self.store.update(PLAYERS, p.id, {"rank": index})

    def save_stats(self, players: list[Player]) -> None:
        """Persist rank and win/loss/streak/win_rate for each player."""
        for player in players:
            self.store.update(PLAYERS, player.id, player.stats_fields())

    def save_attendance(self, player: Player) -> None:
        self.store.update(
            PLAYERS,
            player.id,
            {
                "attendance_status": player.attendance_status,
                "last_seen": player.last_seen,
                "attendance_history": dict(player.attendance_history),
            },
        )

    def delete(self, player_id) -> Player:
        """
        Remove a player from the roster and the store.

        Raises:
            NotFoundError: If no player has this id
        """
        player = self.get_by_id(player_id)
        if player is None:
            raise NotFoundError("player", player_id)
        self.store.delete(PLAYERS, player.id)
        self._players = [p for p in self._players if p.id != player.id]
        logger.info(f"Deleted player {player.id} ({player.name})")
        return player

    def replace_all(self, records: list[dict]) -> int:
        """Overwrite the stored roster with the given records, keeping their ids."""
        self.store.clear(PLAYERS)
        for record in records:
            player = Player.from_record(record)
            if player.id is None:
                self.store.create(PLAYERS, player.to_record())
            else:
                self.store.put(PLAYERS, player.id, player.to_record())
        self.load()
        return len(self._players)
