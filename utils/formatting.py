"""
Shared display formatting helpers.
"""

import datetime
from collections.abc import Iterable

from domain.errors import ClubError, NotFoundError, StoreError, ValidationError

STATUS_EMOJIS = {
    "Present": "✅",
    "Absent": "❌",
    "Future": "⏳",
    "No Data": "▫️",
}


def format_win_rate(win_rate: float) -> str:
    """Win rate with one decimal place (e.g., '66.7')."""
    return f"{win_rate:.1f}"


def format_date(value) -> str:
    """ISO date or date object as 'Oct 19, 2026'; unparseable input is returned as-is."""
    if isinstance(value, datetime.datetime):
        value = value.date()
    if not isinstance(value, datetime.date):
        try:
            value = datetime.date.fromisoformat(str(value)[:10])
        except ValueError:
            return str(value)
    return f"{value:%b} {value.day}, {value.year}"


def format_streak(streak: int) -> str:
    """'W3' for three straight wins, 'L2' for two straight losses, '-' for none."""
    if streak > 0:
        return f"W{streak}"
    if streak < 0:
        return f"L{-streak}"
    return "-"


def format_status(status: str) -> str:
    emoji = STATUS_EMOJIS.get(status, "")
    return f"{emoji} {status}".strip()


def format_leaderboard(players: Iterable) -> str:
    """One line per player in the order given."""
    lines = []
    for p in players:
        lines.append(
            f"{p.rank:>3}. {p.name:<20} {p.wins:>3}-{p.losses:<3} "
            f"{format_win_rate(p.win_rate):>5}%  {format_streak(p.current_streak)}"
        )
    return "\n".join(lines)


def format_error(exc: Exception) -> str:
    """The single message shown to the user for a failed operation."""
    if isinstance(exc, ValidationError):
        return str(exc)
    if isinstance(exc, NotFoundError):
        return f"{exc.kind.capitalize()} not found."
    if isinstance(exc, StoreError):
        return "Could not save changes. Please check your connection and try again."
    if isinstance(exc, ClubError):
        return str(exc) or "Something went wrong."
    return "Something went wrong. Please try again."
