from __future__ import annotations

import logging

import bcrypt

from dormkeep.errors import DormkeepError
from dormkeep.models.user import User, UserRole
from dormkeep.repositories.base import UserRepository

logger = logging.getLogger(__name__)


def _hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


class UserService:
    def __init__(self, repo: UserRepository) -> None:
        self.repo = repo

    def create_user(
        self,
        username: str,
        password: str,
        role: UserRole = UserRole.TENANT,
        email: str = "",
        tenant_id: int | None = None,
        staff_id: int | None = None,
    ) -> User:
        if self.repo.get_by_username(username) is not None:
            logger.warning("User create rejected: username %s already exists", username)
            raise DormkeepError(f"Username '{username}' already exists")
        user = User(
            username=username,
            email=email,
            password_hash=_hash(password),
            role=role,
            tenant_id=tenant_id,
            staff_id=staff_id,
        )
        result = self.repo.create(user)
        logger.info("User created: %s (role=%s)", username, role.value)
        return result

    def get_by_id(self, user_id: int) -> User | None:
        return self.repo.get_by_id(user_id)

    def authenticate(self, username: str, password: str) -> User | None:
        user = self.repo.get_by_username(username)
        if user is None:
            logger.debug("Authentication failed: unknown user %s", username)
            return None
        if bcrypt.checkpw(password.encode(), user.password_hash.encode()):
            return user
        logger.debug("Authentication failed: bad password for %s", username)
        return None

    def change_password(self, username: str, new_password: str) -> None:
        self.repo.update_password_hash(username, _hash(new_password))
        logger.info("Password changed for user: %s", username)

    def list_users(self) -> list[User]:
        return self.repo.list_all()
