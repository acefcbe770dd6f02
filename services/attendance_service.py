"""
Attendance tracking and per-day attendance reports.
"""

import calendar
import datetime
import logging
from collections.abc import Callable

from config import ATTENDANCE_HISTORY_DAYS
from domain.errors import NotFoundError, ValidationError
from domain.models.player import FUTURE, NO_DATA, PRESENT, RECORDABLE_STATUSES, Player
from repositories.player_repository import PlayerRepository
from services.events import DATA_CHANGED, EventBus

logger = logging.getLogger("ttclub.services.attendance")


def _parse_date(value) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value))
    except ValueError as e:
        raise ValidationError(ValidationError.INVALID_DATE, f"Invalid date: {value}") from e


class AttendanceService:
    """
    Stores a sparse date -> status map per player and derives day-by-day
    reports from it. Nothing but the recorded entries is persisted.
    """

    def __init__(
        self,
        player_repo: PlayerRepository,
        events: EventBus | None = None,
        today_provider: Callable[[], datetime.date] = datetime.date.today,
    ):
        self.player_repo = player_repo
        self.events = events or EventBus()
        self.today_provider = today_provider

    def set_attendance(self, player_id, status: str, date=None) -> Player:
        """
        Record a player's status for a day (today by default).

        A later write for the same day replaces the earlier one.

        Raises:
            ValidationError: If status is not Present or Absent
            NotFoundError: If no player has this id
        """
        if status not in RECORDABLE_STATUSES:
            raise ValidationError(
                ValidationError.INVALID_STATUS,
                f"Status must be one of {', '.join(RECORDABLE_STATUSES)}.",
            )
        player = self.player_repo.get_by_id(player_id)
        if player is None:
            raise NotFoundError("player", player_id)

        day = _parse_date(date) if date is not None else self.today_provider()
        day_key = day.isoformat()
        player.attendance_history[day_key] = status
        player.attendance_status = status
        player.last_seen = day_key
        self.player_repo.save_attendance(player)

        logger.info(f"Attendance for {player.id} on {day_key}: {status}")
        self.events.emit(DATA_CHANGED, entity="attendance", action="updated")
        return player

    def _status_for(self, player: Player, day: datetime.date, today: datetime.date) -> str:
        if day > today:
            return FUTURE
        recorded = player.attendance_history.get(day.isoformat())
        if recorded:
            return recorded
        if day == today and player.attendance_status:
            return player.attendance_status
        return NO_DATA

    def _report(self, player: Player, days) -> list[dict]:
        today = self.today_provider()
        return [
            {"date": day.isoformat(), "status": self._status_for(player, day, today)}
            for day in days
        ]

    def monthly_report(self, player_id, year: int, month_index: int) -> list[dict]:
        """
        One {date, status} entry per day of a month.

        month_index counts from 0 (January) to 11 (December). Returns an
        empty list for an unknown player.

        Raises:
            ValidationError: If year or month_index is out of range
        """
        try:
            first = datetime.date(int(year), int(month_index) + 1, 1)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValidationError(
                ValidationError.INVALID_DATE, f"Invalid month: year {year}, month index {month_index}"
            ) from e
        player = self.player_repo.get_by_id(player_id)
        if player is None:
            return []
        _, days_in_month = calendar.monthrange(first.year, first.month)
        days = (first.replace(day=d) for d in range(1, days_in_month + 1))
        return self._report(player, days)

    def recent_history(self, player_id, days: int = ATTENDANCE_HISTORY_DAYS) -> list[dict]:
        """Entries for each day from `days` ago through today."""
        player = self.player_repo.get_by_id(player_id)
        if player is None:
            return []
        today = self.today_provider()
        start = today - datetime.timedelta(days=days)
        return self._report(player, (start + datetime.timedelta(days=i) for i in range(days + 1)))

    def present_on(self, date) -> list[Player]:
        """Players recorded as Present on a day, in ladder order."""
        day_key = _parse_date(date).isoformat()
        return [
            p for p in self.player_repo.get_all() if p.attendance_history.get(day_key) == PRESENT
        ]
