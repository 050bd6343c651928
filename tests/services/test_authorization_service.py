import pytest

from dormkeep.models.user import User, UserRole
from dormkeep.services.authorization_service import AuthorizationService

ADMIN_ONLY = [
    "can_create_billing",
    "can_edit_billing",
    "can_manage_settings",
    "can_manage_staff",
    "can_manage_users",
]
OPERATORS = [
    "can_mark_paid",
    "can_view_billings",
    "can_manage_rooms",
    "can_manage_tenants",
    "can_manage_announcements",
]


def _user(role: UserRole) -> User:
    return User(id=1, username=role.value, role=role)


class TestAuthorizationService:
    def setup_method(self):
        self.service = AuthorizationService()

    @pytest.mark.parametrize("check", ADMIN_ONLY + OPERATORS)
    def test_admin_can_do_everything(self, check):
        assert getattr(self.service, check)(_user(UserRole.ADMIN)) is True

    @pytest.mark.parametrize("check", ADMIN_ONLY)
    def test_staff_cannot_do_admin_actions(self, check):
        assert getattr(self.service, check)(_user(UserRole.STAFF)) is False

    @pytest.mark.parametrize("check", OPERATORS)
    def test_staff_operates(self, check):
        assert getattr(self.service, check)(_user(UserRole.STAFF)) is True

    @pytest.mark.parametrize("check", ADMIN_ONLY + OPERATORS)
    def test_tenant_denied(self, check):
        assert getattr(self.service, check)(_user(UserRole.TENANT)) is False
