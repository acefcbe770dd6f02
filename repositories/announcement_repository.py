"""
Repository for club announcements.
"""

import logging

from domain.errors import NotFoundError
from domain.models.announcement import Announcement
from repositories.interfaces import ANNOUNCEMENTS, IStore

logger = logging.getLogger("ttclub.repositories.announcement")


class AnnouncementRepository:
    def __init__(self, store: IStore):
        self.store = store

    def add(self, announcement: Announcement) -> Announcement:
        announcement.id = self.store.create(ANNOUNCEMENTS, announcement.to_record())
        return announcement

    def get_by_id(self, announcement_id) -> Announcement | None:
        record = self.store.get(ANNOUNCEMENTS, str(announcement_id))
        return Announcement.from_record(record) if record else None

    def get_all(self) -> list[Announcement]:
        return [Announcement.from_record(r) for r in self.store.list_all(ANNOUNCEMENTS)]

    def update(self, announcement_id, fields: dict) -> Announcement:
        """
        Raises:
            NotFoundError: If no announcement has this id
        """
        self.store.update(ANNOUNCEMENTS, str(announcement_id), fields)
        return self.get_by_id(announcement_id)

    def delete(self, announcement_id) -> Announcement:
        announcement = self.get_by_id(announcement_id)
        if announcement is None:
            raise NotFoundError("announcement", announcement_id)
        self.store.delete(ANNOUNCEMENTS, announcement.id)
        return announcement

    def replace_all(self, records: list[dict]) -> int:
        self.store.clear(ANNOUNCEMENTS)
        for record in records:
            if record.get("id"):
                self.store.put(ANNOUNCEMENTS, record["id"], record)
            else:
                self.store.create(ANNOUNCEMENTS, record)
        return len(records)
