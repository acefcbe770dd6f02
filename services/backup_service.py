"""
JSON export and import of the whole club dataset.
"""

import datetime
import logging

from repositories.announcement_repository import AnnouncementRepository
from repositories.interfaces import ANNOUNCEMENTS, MATCHES, PLAYERS, USERS
from repositories.match_repository import MatchRepository
from repositories.player_repository import PlayerRepository
from repositories.user_repository import ROLE_PLAYER, UserRepository
from services.events import DATA_LOADED, EventBus
from services.stats_service import ReplayReport, StatsService

logger = logging.getLogger("ttclub.services.backup")


class BackupService:
    def __init__(
        self,
        player_repo: PlayerRepository,
        match_repo: MatchRepository,
        announcement_repo: AnnouncementRepository,
        user_repo: UserRepository,
        stats_service: StatsService,
        events: EventBus | None = None,
    ):
        self.player_repo = player_repo
        self.match_repo = match_repo
        self.announcement_repo = announcement_repo
        self.user_repo = user_repo
        self.stats_service = stats_service
        self.events = events or EventBus()

    def export_data(self, include_users: bool = True) -> dict:
        payload = {
            PLAYERS: [{"id": p.id, **p.to_record()} for p in self.player_repo.get_all()],
            MATCHES: [
                {"id": m.id, **m.to_record()} for m in self.match_repo.get_in_stored_order()
            ],
            ANNOUNCEMENTS: [
                {"id": a.id, **a.to_record()} for a in self.announcement_repo.get_all()
            ],
            "exported_at": datetime.datetime.now().isoformat(timespec="seconds"),
        }
        if include_users:
            payload[USERS] = self.user_repo.get_all()
        return payload

    def export_player_data(self) -> dict:
        """Export with only player accounts; admin credentials are left out."""
        payload = self.export_data(include_users=True)
        payload[USERS] = [u for u in payload[USERS] if u.get("role") == ROLE_PLAYER]
        return payload

    def import_data(self, payload: dict, merge_users: bool = False) -> ReplayReport:
        """
        Replace every collection present in the payload, then rebuild stats.

        With merge_users, imported accounts are added to the existing ones
        (same username: the imported account wins) instead of replacing them.
        """
        if not isinstance(payload, dict):
            raise ValueError("Import payload must be a JSON object.")

        if PLAYERS in payload:
            self.player_repo.replace_all(payload[PLAYERS])
        if MATCHES in payload:
            self.match_repo.replace_all(payload[MATCHES])
        if ANNOUNCEMENTS in payload:
            self.announcement_repo.replace_all(payload[ANNOUNCEMENTS])
        if USERS in payload:
            users = payload[USERS]
            if merge_users:
                merged = {u["username"]: u for u in self.user_repo.get_all()}
                merged.update({u["username"]: u for u in users})
                users = list(merged.values())
            self.user_repo.replace_all(users)

        report = self.stats_service.recalculate_all()
        logger.info(
            f"Imported {len(self.player_repo.get_all())} players and "
            f"{len(self.match_repo.get_in_stored_order())} matches"
        )
        self.events.emit(DATA_LOADED)
        return report
