"""
Player lifecycle: registration, edits and removal.
"""

import datetime
import logging

from domain.models.player import Player
from repositories.match_repository import MatchRepository
from repositories.player_repository import PlayerRepository
from repositories.user_repository import ROLE_PLAYER, UserRepository
from services.events import DATA_CHANGED, PLAYER_CREATED, EventBus
from services.stats_service import StatsService

logger = logging.getLogger("ttclub.services.player")

STAT_FIELDS = {"wins", "losses", "current_streak", "win_rate"}


class PlayerService:
    """
    Coordinates roster changes with the ledger, accounts and ranking.

    Deleting a player cascades to their matches and login account and
    re-ranks the remaining roster.
    """

    def __init__(
        self,
        player_repo: PlayerRepository,
        match_repo: MatchRepository,
        stats_service: StatsService,
        user_repo: UserRepository | None = None,
        events: EventBus | None = None,
    ):
        self.player_repo = player_repo
        self.match_repo = match_repo
        self.stats_service = stats_service
        self.user_repo = user_repo
        self.events = events or EventBus()

    def add_player(
        self,
        name: str,
        rank: int | None = None,
        email: str | None = None,
        username: str | None = None,
        password: str | None = None,
        today: datetime.date | None = None,
    ) -> Player:
        """
        Register a player, optionally with a login account.

        The requested rank only places the player on the ladder until the next
        recomputation driven by match results.
        """
        player = self.player_repo.add(name, rank, today=today)
        if username and self.user_repo is not None:
            self.user_repo.create(username, email, password or "", role=ROLE_PLAYER, player_id=player.id)

        self.events.emit(
            PLAYER_CREATED,
            player=player,
            email=email,
            username=username,
            password=password,
        )
        self.events.emit(DATA_CHANGED, entity="player", action="created")
        return player

    def update_player(self, player_id, fields: dict) -> Player:
        """
        Apply an administrative edit.

        A rank-only edit moves the player on the ladder. Any stat edit re-ranks
        everyone from results, which overrides a rank given alongside it.

        Raises:
            NotFoundError: If no player has this id
            ValidationError: If a count is negative or not a whole number
        """
        player = self.player_repo.update(player_id, fields)
        if STAT_FIELDS & set(fields):
            self.stats_service.re_rank()
        self.events.emit(DATA_CHANGED, entity="player", action="updated")
        return player

    def delete_player(self, player_id) -> Player:
        """
        Remove a player and every match they appear in.

        Raises:
            NotFoundError: If no player has this id
        """
        player = self.player_repo.delete(player_id)
        removed = self.match_repo.delete_involving(player.id)
        if self.user_repo is not None:
            self.user_repo.delete_for_player(player.id)
        self.stats_service.re_rank()
        logger.info(f"Player {player.id} removed with {len(removed)} matches")
        self.events.emit(DATA_CHANGED, entity="player", action="deleted")
        return player

    def get_players(self) -> list[Player]:
        return self.player_repo.get_all()

    def get_player(self, player_id) -> Player | None:
        return self.player_repo.get_by_id(player_id)
