"""
Announcement domain model.
"""

from dataclasses import dataclass

from domain.models.player import normalize_id

PRIORITY_ORDER = {"high": 0, "normal": 1, "low": 2}


@dataclass
class Announcement:
    title: str
    content: str
    type: str = "general"
    priority: str = "normal"
    created_at: str | None = None
    created_by: str | None = None
    is_active: bool = True
    expires_at: str | None = None  # ISO datetime; None never expires
    id: str | None = None

    def is_visible(self, now_iso: str) -> bool:
        if not self.is_active:
            return False
        return self.expires_at is None or self.expires_at > now_iso

    def to_record(self) -> dict:
        return {
            "title": self.title,
            "content": self.content,
            "type": self.type,
            "priority": self.priority,
            "created_at": self.created_at,
            "created_by": self.created_by,
            "is_active": self.is_active,
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Announcement":
        return cls(
            id=normalize_id(record.get("id")),
            title=record.get("title") or "",
            content=record.get("content") or "",
            type=record.get("type") or "general",
            priority=record.get("priority") or "normal",
            created_at=record.get("created_at"),
            created_by=record.get("created_by"),
            is_active=bool(record.get("is_active", True)),
            expires_at=record.get("expires_at"),
        )
