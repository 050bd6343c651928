from dormkeep.models.system_settings import SystemSettings
from dormkeep.repositories.sqlalchemy import SQLAlchemySettingsRepository


class TestSettingsRepo:
    def test_get_empty(self, settings_repo: SQLAlchemySettingsRepository):
        assert settings_repo.get() is None

    def test_save_inserts(self, settings_repo: SQLAlchemySettingsRepository):
        saved = settings_repo.save(SystemSettings(water_rate=2000, electricity_rate=700, room_rent=300000))
        assert saved.water_rate == 2000
        assert saved.electricity_rate == 700
        assert saved.updated_at is not None

    def test_save_updates_single_row(self, settings_repo: SQLAlchemySettingsRepository, db_connection):
        from sqlalchemy import text

        settings_repo.save(SystemSettings(electricity_rate=700))
        settings_repo.save(SystemSettings(electricity_rate=800, floor_count=4, updated_by=1))

        fetched = settings_repo.get()
        assert fetched.electricity_rate == 800
        assert fetched.floor_count == 4
        assert fetched.updated_by == 1
        assert db_connection.execute(text("SELECT COUNT(*) FROM system_settings")).scalar() == 1
