from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from dormkeep.constants import BKK_TZ
from dormkeep.errors import DormkeepError
from dormkeep.models.announcement import Announcement
from dormkeep.repositories.base import AnnouncementRepository

logger = logging.getLogger(__name__)

RECENT_DAYS = 7


class AnnouncementService:
    def __init__(self, repo: AnnouncementRepository) -> None:
        self.repo = repo

    def create_announcement(
        self,
        title: str,
        content: str = "",
        important: bool = False,
        publish_date: date | None = None,
        created_by: int | None = None,
    ) -> Announcement:
        if not title.strip():
            raise DormkeepError("Title is required")
        announcement = Announcement(
            title=title.strip(),
            content=content,
            important=important,
            publish_date=publish_date or datetime.now(BKK_TZ).date(),
            created_by=created_by,
        )
        result = self.repo.create(announcement)
        logger.info("Announcement created: id=%s, title=%s", result.id, result.title)
        return result

    def list_recent(self, days: int = RECENT_DAYS) -> list[Announcement]:
        since = datetime.now(BKK_TZ).date() - timedelta(days=days)
        result = self.repo.list_since(since)
        logger.debug("Listed %d announcements since %s", len(result), since)
        return result

    def get_announcement_by_uuid(self, uuid: str) -> Announcement | None:
        return self.repo.get_by_uuid(uuid)

    def delete_announcement(self, announcement: Announcement) -> None:
        if announcement.id is None:
            raise ValueError("Cannot delete announcement without an id")
        self.repo.delete(announcement.id)
        logger.info("Announcement %s deleted", announcement.id)
