from datetime import date

from dormkeep.models.announcement import Announcement
from dormkeep.repositories.sqlalchemy import SQLAlchemyAnnouncementRepository


class TestAnnouncementRepo:
    def test_create_and_get(self, announcement_repo: SQLAlchemyAnnouncementRepository):
        created = announcement_repo.create(
            Announcement(title="Water shut-off", content="Saturday 9-12", publish_date=date(2025, 3, 1), important=True)
        )
        assert created.id is not None
        fetched = announcement_repo.get_by_uuid(created.uuid)
        assert fetched.title == "Water shut-off"
        assert fetched.important is True
        assert fetched.publish_date == date(2025, 3, 1)

    def test_list_since(self, announcement_repo: SQLAlchemyAnnouncementRepository):
        announcement_repo.create(Announcement(title="Old", publish_date=date(2025, 1, 1)))
        announcement_repo.create(Announcement(title="Recent", publish_date=date(2025, 3, 5)))
        announcement_repo.create(Announcement(title="Newest", publish_date=date(2025, 3, 8)))

        titles = [a.title for a in announcement_repo.list_since(date(2025, 3, 1))]
        assert titles == ["Newest", "Recent"]

    def test_delete(self, announcement_repo: SQLAlchemyAnnouncementRepository):
        created = announcement_repo.create(Announcement(title="Gone", publish_date=date(2025, 3, 1)))
        announcement_repo.delete(created.id)
        assert announcement_repo.get_by_uuid(created.uuid) is None
