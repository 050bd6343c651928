from unittest.mock import MagicMock

import bcrypt
import pytest

from dormkeep.errors import DormkeepError
from dormkeep.models.user import User, UserRole
from dormkeep.services.user_service import UserService


class TestUserService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.service = UserService(self.mock_repo)

    def test_create_user_hashes_password(self):
        self.mock_repo.get_by_username.return_value = None
        self.mock_repo.create.side_effect = lambda u: u

        result = self.service.create_user("admin", "secret", role=UserRole.ADMIN)

        assert result.role == UserRole.ADMIN
        assert result.password_hash != "secret"
        assert bcrypt.checkpw(b"secret", result.password_hash.encode())

    def test_create_user_duplicate(self):
        self.mock_repo.get_by_username.return_value = User(username="admin")
        with pytest.raises(DormkeepError, match="already exists"):
            self.service.create_user("admin", "secret")

    def test_authenticate(self):
        hashed = bcrypt.hashpw(b"secret", bcrypt.gensalt()).decode()
        self.mock_repo.get_by_username.return_value = User(username="admin", password_hash=hashed)

        assert self.service.authenticate("admin", "secret").username == "admin"
        assert self.service.authenticate("admin", "wrong") is None

    def test_authenticate_unknown_user(self):
        self.mock_repo.get_by_username.return_value = None
        assert self.service.authenticate("ghost", "secret") is None

    def test_change_password(self):
        self.service.change_password("admin", "new-secret")
        username, new_hash = self.mock_repo.update_password_hash.call_args.args
        assert username == "admin"
        assert bcrypt.checkpw(b"new-secret", new_hash.encode())
