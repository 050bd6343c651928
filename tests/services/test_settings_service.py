from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from dormkeep.models.system_settings import SystemSettings
from dormkeep.services.settings_service import SettingsService


class TestSettingsService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.service = SettingsService(self.mock_repo)

    def test_get_settings_falls_back_to_config(self):
        self.mock_repo.get.return_value = None
        with patch("dormkeep.services.settings_service.settings") as mock_settings:
            mock_settings.default_water_rate = 1500
            mock_settings.default_electricity_rate = 800
            mock_settings.default_room_rent = 250000
            mock_settings.default_late_fee = 0
            mock_settings.default_floor_count = 2
            result = self.service.get_settings()
        assert result.water_rate == 1500
        assert result.electricity_rate == 800
        assert result.floor_count == 2

    def test_get_settings_saved(self):
        self.mock_repo.get.return_value = SystemSettings(electricity_rate=900)
        assert self.service.get_rates().electricity_rate == 900

    def test_save_settings_sets_updated_by(self):
        self.mock_repo.save.side_effect = lambda s: s
        result = self.service.save_settings(SystemSettings(water_rate=2000), updated_by=1)
        assert result.updated_by == 1
        assert result.water_rate == 2000

    def test_save_settings_revalidates(self):
        ss = SystemSettings()
        ss.electricity_rate = -5
        with pytest.raises(ValidationError):
            self.service.save_settings(ss)
        self.mock_repo.save.assert_not_called()
