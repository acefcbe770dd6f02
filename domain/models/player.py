"""
Player domain model.
"""

from dataclasses import dataclass, field

PRESENT = "Present"
ABSENT = "Absent"
FUTURE = "Future"
NO_DATA = "No Data"

# Statuses that may be recorded; FUTURE and NO_DATA are only ever derived.
RECORDABLE_STATUSES = (PRESENT, ABSENT)


def normalize_id(value) -> str | None:
    """Return the canonical string form of an entity id (None stays None)."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def compute_win_rate(wins: int, losses: int) -> float:
    """Win percentage, 0 when no games were played."""
    total = wins + losses
    if total <= 0:
        return 0.0
    return wins / total * 100


@dataclass
class Player:
    """
    Represents a club member on the ladder.

    This is a pure domain model with no infrastructure dependencies.
    """

    name: str
    rank: int = 0
    wins: int = 0
    losses: int = 0
    current_streak: int = 0  # +N = N straight wins, -N = N straight losses
    win_rate: float = 0.0
    attendance_status: str | None = None
    last_seen: str | None = None  # ISO date
    attendance_history: dict[str, str] = field(default_factory=dict)
    id: str | None = None
    created_at: str | None = None

    def get_total_games(self) -> int:
        """Get total games played."""
        return self.wins + self.losses

    def refresh_win_rate(self) -> float:
        """Recompute win_rate from wins and losses."""
        self.win_rate = compute_win_rate(self.wins, self.losses)
        return self.win_rate

    def reset_stats(self) -> None:
        self.wins = 0
        self.losses = 0
        self.current_streak = 0
        self.win_rate = 0.0

    def stats_fields(self) -> dict:
        """The derived fields written back after a stats recomputation."""
        return {
            "rank": self.rank,
            "wins": self.wins,
            "losses": self.losses,
            "current_streak": self.current_streak,
            "win_rate": self.win_rate,
        }

    def to_record(self) -> dict:
        """Flat document persisted by the store (id excluded)."""
        return {
            "name": self.name,
            "rank": self.rank,
            "wins": self.wins,
            "losses": self.losses,
            "current_streak": self.current_streak,
            "win_rate": self.win_rate,
            "attendance_status": self.attendance_status,
            "last_seen": self.last_seen,
            "attendance_history": dict(self.attendance_history),
            "created_at": self.created_at,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Player":
        return cls(
            id=normalize_id(record.get("id")),
            name=record.get("name") or "",
            rank=int(record.get("rank") or 0),
            wins=int(record.get("wins") or 0),
            losses=int(record.get("losses") or 0),
            current_streak=int(record.get("current_streak") or 0),
            win_rate=float(record.get("win_rate") or 0.0),
            attendance_status=record.get("attendance_status"),
            last_seen=record.get("last_seen"),
            attendance_history=dict(record.get("attendance_history") or {}),
            created_at=record.get("created_at"),
        )

    def __str__(self) -> str:
        return f"#{self.rank} {self.name} (W-L: {self.wins}-{self.losses}, {self.win_rate:.1f}%)"
