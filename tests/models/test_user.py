from dormkeep.models.user import User, UserRole


class TestUser:
    def test_defaults(self):
        user = User(username="somchai")
        assert user.id is None
        assert user.role == UserRole.TENANT
        assert user.tenant_id is None
        assert user.staff_id is None

    def test_role_from_string(self):
        assert UserRole("admin") is UserRole.ADMIN
        assert User(username="a", role="staff").role == UserRole.STAFF
