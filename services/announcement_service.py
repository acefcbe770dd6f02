"""
Announcement board.
"""

import datetime
import logging

from domain.errors import NotFoundError
from domain.models.announcement import PRIORITY_ORDER, Announcement
from repositories.announcement_repository import AnnouncementRepository
from services.events import DATA_CHANGED, EventBus

logger = logging.getLogger("ttclub.services.announcement")

EDITABLE_FIELDS = {"title", "content", "type", "priority", "is_active", "expires_at"}


def _now_iso() -> str:
    return datetime.datetime.now().isoformat(timespec="seconds")


class AnnouncementService:
    def __init__(self, announcement_repo: AnnouncementRepository, events: EventBus | None = None):
        self.announcement_repo = announcement_repo
        self.events = events or EventBus()

    def create(
        self,
        title: str,
        content: str,
        type: str = "general",
        priority: str = "normal",
        created_by: str | None = None,
        expires_at: str | None = None,
    ) -> Announcement:
        announcement = self.announcement_repo.add(
            Announcement(
                title=title,
                content=content,
                type=type,
                priority=priority,
                created_at=_now_iso(),
                created_by=created_by,
                expires_at=expires_at,
            )
        )
        logger.info(f"Posted announcement {announcement.id}: {title}")
        self.events.emit(DATA_CHANGED, entity="announcement", action="created")
        return announcement

    def get(self, announcement_id) -> Announcement:
        announcement = self.announcement_repo.get_by_id(announcement_id)
        if announcement is None:
            raise NotFoundError("announcement", announcement_id)
        return announcement

    def update(self, announcement_id, fields: dict) -> Announcement:
        changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        announcement = self.announcement_repo.update(announcement_id, changes)
        self.events.emit(DATA_CHANGED, entity="announcement", action="updated")
        return announcement

    def deactivate(self, announcement_id) -> Announcement:
        return self.update(announcement_id, {"is_active": False})

    def delete(self, announcement_id) -> Announcement:
        announcement = self.announcement_repo.delete(announcement_id)
        self.events.emit(DATA_CHANGED, entity="announcement", action="deleted")
        return announcement

    def list_all(self) -> list[Announcement]:
        return sorted(self.announcement_repo.get_all(), key=lambda a: a.created_at or "", reverse=True)

    def list_active(self, now: str | None = None) -> list[Announcement]:
        """Visible announcements, high priority first, newest first within a priority."""
        now = now or _now_iso()
        visible = [a for a in self.list_all() if a.is_visible(now)]
        return sorted(visible, key=lambda a: PRIORITY_ORDER.get(a.priority, len(PRIORITY_ORDER)))
