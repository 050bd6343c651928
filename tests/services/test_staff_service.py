from unittest.mock import MagicMock

import pytest

from dormkeep.errors import DormkeepError
from dormkeep.models.staff import Staff
from dormkeep.services.staff_service import StaffService


class TestStaffService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.service = StaffService(self.mock_repo)

    def test_create_staff(self):
        self.mock_repo.create.return_value = Staff(id=1, first_name="Malee")
        result = self.service.create_staff(Staff(first_name="Malee"))
        assert result.id == 1

    def test_create_staff_requires_name(self):
        with pytest.raises(DormkeepError):
            self.service.create_staff(Staff(first_name=""))
        self.mock_repo.create.assert_not_called()

    def test_list_staff(self):
        self.mock_repo.list_all.return_value = []
        self.service.list_staff(include_inactive=True)
        self.mock_repo.list_all.assert_called_once_with(True)

    def test_deactivate(self):
        self.service.deactivate(Staff(id=3, first_name="Malee"))
        self.mock_repo.set_active.assert_called_once_with(3, False)

    def test_deactivate_twice_rejected(self):
        with pytest.raises(DormkeepError, match="already inactive"):
            self.service.deactivate(Staff(id=3, first_name="Malee", is_active=False))
        self.mock_repo.set_active.assert_not_called()
