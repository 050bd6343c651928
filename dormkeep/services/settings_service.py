from __future__ import annotations

import logging

from dormkeep.models.billing import BillingRates
from dormkeep.models.system_settings import SystemSettings
from dormkeep.repositories.base import SettingsRepository
from dormkeep.settings import settings

logger = logging.getLogger(__name__)


def default_system_settings() -> SystemSettings:
    return SystemSettings(
        water_rate=settings.default_water_rate,
        electricity_rate=settings.default_electricity_rate,
        room_rent=settings.default_room_rent,
        late_fee=settings.default_late_fee,
        floor_count=settings.default_floor_count,
    )


class SettingsService:
    def __init__(self, repo: SettingsRepository) -> None:
        self.repo = repo

    def get_settings(self) -> SystemSettings:
        saved = self.repo.get()
        if saved is None:
            logger.debug("System settings never saved, using configured defaults")
            return default_system_settings()
        return saved

    def save_settings(self, system_settings: SystemSettings, updated_by: int | None = None) -> SystemSettings:
        # Re-validate: model_copy/attribute assignment bypass the field constraints.
        validated = SystemSettings.model_validate(system_settings.model_dump() | {"updated_by": updated_by})
        result = self.repo.save(validated)
        logger.info(
            "System settings saved: water=%s, electricity=%s, rent=%s, by=%s",
            result.water_rate,
            result.electricity_rate,
            result.room_rent,
            updated_by,
        )
        return result

    def get_rates(self) -> BillingRates:
        return self.get_settings().to_rates()
