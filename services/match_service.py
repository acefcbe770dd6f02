"""
Match ledger: validating and recording results.
"""

import datetime
import logging

from domain.errors import ValidationError
from domain.models.match import Match
from domain.models.player import normalize_id
from repositories.match_repository import MatchRepository
from repositories.player_repository import PlayerRepository
from services.events import DATA_CHANGED, EventBus
from services.stats_service import StatsService

logger = logging.getLogger("ttclub.services.match")

UNKNOWN_PLAYER_NAME = "Unknown Player"


def coerce_score(value) -> int:
    """Scores are non-negative integers; anything unparseable counts as 0."""
    try:
        score = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(score, 0)


def _to_iso_date(value) -> str:
    if value is None or value == "":
        return datetime.date.today().isoformat()
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    return str(value)


class MatchService:
    """Handles result validation, recording, deletion and ledger listing."""

    def __init__(
        self,
        player_repo: PlayerRepository,
        match_repo: MatchRepository,
        stats_service: StatsService,
        events: EventBus | None = None,
    ):
        self.player_repo = player_repo
        self.match_repo = match_repo
        self.stats_service = stats_service
        self.events = events or EventBus()

    def _validate(self, player1_id, player2_id, winner_id) -> None:
        if player1_id is None or player2_id is None or winner_id is None:
            raise ValidationError(
                ValidationError.MISSING_FIELDS, "Both players and a winner are required."
            )
        if player1_id == player2_id:
            raise ValidationError(
                ValidationError.SAME_PLAYER, "A player cannot play against themselves."
            )
        if winner_id not in (player1_id, player2_id):
            raise ValidationError(
                ValidationError.WINNER_NOT_PARTICIPANT, "The winner must be one of the two players."
            )
        for pid in (player1_id, player2_id):
            if not self.player_repo.exists(pid):
                raise ValidationError(ValidationError.UNKNOWN_PLAYER, f"Player {pid} does not exist.")

    def record_match(
        self,
        player1_id,
        player2_id,
        player1_score,
        player2_score,
        winner_id,
        match_date=None,
    ) -> dict:
        """
        Record a result and update both players' stats and the ladder.

        Args:
            player1_id: First player's id
            player2_id: Second player's id
            player1_score: Points for player1; clamped to a non-negative int
            player2_score: Points for player2; clamped to a non-negative int
            winner_id: Must be player1_id or player2_id
            match_date: date or ISO string, defaults to today

        Returns:
            The stored match as a dict with player1_name, player2_name and
            winner_name attached.

        Raises:
            ValidationError: On malformed input; nothing is written.
        """
        p1 = normalize_id(player1_id)
        p2 = normalize_id(player2_id)
        winner = normalize_id(winner_id)
        self._validate(p1, p2, winner)

        match = Match(
            player1_id=p1,
            player2_id=p2,
            player1_score=coerce_score(player1_score),
            player2_score=coerce_score(player2_score),
            winner_id=winner,
            match_date=_to_iso_date(match_date),
            created_at=datetime.datetime.now().isoformat(timespec="seconds"),
        )
        self.match_repo.add(match)
        self.stats_service.apply_match(match)
        logger.info(
            f"Recorded match {match.id}: {p1} {match.player1_score}-{match.player2_score} {p2}, "
            f"winner {winner}"
        )
        self.events.emit(DATA_CHANGED, entity="match", action="created")
        return self.describe(match)

    def describe(self, match: Match) -> dict:
        """Match fields plus display names for both players and the winner."""
        return {
            "id": match.id,
            **match.to_record(),
            "player1_name": self.get_player_name(match.player1_id),
            "player2_name": self.get_player_name(match.player2_id),
            "winner_name": self.get_player_name(match.winner_id),
        }

    def get_player_name(self, player_id) -> str:
        player = self.player_repo.get_by_id(player_id)
        return player.name if player else UNKNOWN_PLAYER_NAME

    def delete_match(self, match_id) -> bool:
        """
        Remove a match from the ledger.

        Stats it already produced are left in place; run
        StatsService.recalculate_all() to fold the removal back in.
        """
        deleted = self.match_repo.delete(match_id)
        if deleted:
            logger.info(f"Deleted match {match_id}")
            self.events.emit(DATA_CHANGED, entity="match", action="deleted")
        return deleted

    def clear_all_matches(self) -> int:
        """Empty the ledger and zero every player's record."""
        count = self.match_repo.clear()
        self.stats_service.reset_all()
        logger.info(f"Cleared {count} matches")
        self.events.emit(DATA_CHANGED, entity="match", action="cleared")
        return count

    def get_matches(self) -> list[Match]:
        """All matches, newest first."""
        return self.match_repo.get_all()

    def get_match_history(self, player_id=None) -> list[dict]:
        """Described matches, newest first, optionally for one player."""
        matches = self.match_repo.get_for_player(player_id) if player_id else self.get_matches()
        return [self.describe(m) for m in matches]
