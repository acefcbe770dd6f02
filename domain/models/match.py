"""
Match domain model.
"""

from dataclasses import dataclass

from domain.models.player import normalize_id


@dataclass
class Match:
    """A recorded singles result. Immutable once stored, except for deletion."""

    player1_id: str
    player2_id: str
    player1_score: int
    player2_score: int
    winner_id: str
    match_date: str  # ISO date
    created_at: str | None = None
    id: str | None = None

    @property
    def loser_id(self) -> str:
        return self.player2_id if self.winner_id == self.player1_id else self.player1_id

    def involves(self, player_id) -> bool:
        """True if the player appears as player1, player2 or winner."""
        pid = normalize_id(player_id)
        return pid in (self.player1_id, self.player2_id, self.winner_id)

    def to_record(self) -> dict:
        return {
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
            "winner_id": self.winner_id,
            "match_date": self.match_date,
            "created_at": self.created_at,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Match":
        return cls(
            id=normalize_id(record.get("id")),
            player1_id=normalize_id(record.get("player1_id")),
            player2_id=normalize_id(record.get("player2_id")),
            player1_score=int(record.get("player1_score") or 0),
            player2_score=int(record.get("player2_score") or 0),
            winner_id=normalize_id(record.get("winner_id")),
            match_date=record.get("match_date") or "",
            created_at=record.get("created_at"),
        )
