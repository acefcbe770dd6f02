"""
Composition root for the table tennis club manager.
"""

import logging

import config
from repositories.announcement_repository import AnnouncementRepository
from repositories.interfaces import IStore
from repositories.json_store import JsonFileStore
from repositories.match_repository import MatchRepository
from repositories.player_repository import PlayerRepository
from repositories.sqlite_store import SqliteStore
from repositories.user_repository import UserRepository
from services.announcement_service import AnnouncementService
from services.attendance_service import AttendanceService
from services.auth_service import AuthService
from services.backup_service import BackupService
from services.events import DATA_LOADED, PLAYER_CREATED, EventBus
from services.match_service import MatchService
from services.notification_service import WelcomeEmailNotifier
from services.player_service import PlayerService
from services.stats_service import StatsService
from utils.formatting import format_leaderboard

logger = logging.getLogger("ttclub")


def create_store(backend: str | None = None, path: str | None = None) -> IStore:
    backend = backend or config.STORE_BACKEND
    if backend == "json":
        return JsonFileStore(path or config.JSON_STORE_PATH)
    return SqliteStore(path or config.DB_PATH)


class ClubApp:
    """
    Wires one store to the repositories and services of a session.

    UI code subscribes to app.events ("data_loaded", "data_changed") and
    calls the services directly.
    """

    def __init__(self, store: IStore, notifier: WelcomeEmailNotifier | None = None, today_provider=None):
        self.store = store
        self.events = EventBus()

        self.player_repo = PlayerRepository(store)
        self.match_repo = MatchRepository(store)
        self.user_repo = UserRepository(store)
        self.announcement_repo = AnnouncementRepository(store)

        self.stats_service = StatsService(self.player_repo, self.match_repo)
        self.player_service = PlayerService(
            self.player_repo,
            self.match_repo,
            self.stats_service,
            user_repo=self.user_repo,
            events=self.events,
        )
        self.match_service = MatchService(
            self.player_repo, self.match_repo, self.stats_service, events=self.events
        )
        attendance_kwargs = {"today_provider": today_provider} if today_provider else {}
        self.attendance_service = AttendanceService(
            self.player_repo, events=self.events, **attendance_kwargs
        )
        self.announcement_service = AnnouncementService(self.announcement_repo, events=self.events)
        self.auth_service = AuthService(self.user_repo)
        self.backup_service = BackupService(
            self.player_repo,
            self.match_repo,
            self.announcement_repo,
            self.user_repo,
            self.stats_service,
            events=self.events,
        )

        self.notifier = notifier or WelcomeEmailNotifier()
        self.events.subscribe(PLAYER_CREATED, self.notifier.on_player_created)

    def load(self) -> None:
        """Refresh caches from the store and signal that data is ready."""
        self.player_repo.load()
        self.match_repo.load()
        self.auth_service.ensure_admin_exists()
        logger.info("Club data loaded successfully")
        self.events.emit(DATA_LOADED)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    app = ClubApp(create_store())
    app.load()
    players = app.player_service.get_players()
    if players:
        logger.info(f"Current ladder:\n{format_leaderboard(players)}")
    else:
        logger.info("No players registered yet")


if __name__ == "__main__":
    main()
