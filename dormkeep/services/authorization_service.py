from __future__ import annotations

import logging

from dormkeep.models.user import User, UserRole

logger = logging.getLogger(__name__)

_ADMIN = frozenset({UserRole.ADMIN})
_OPERATORS = frozenset({UserRole.ADMIN, UserRole.STAFF})


class AuthorizationService:
    """Role checks used by the CLI and the web API before calling a service."""

    def _check(self, user: User, allowed: frozenset[UserRole], action: str) -> bool:
        result = user.role in allowed
        logger.debug("user=%s role=%s %s=%s", user.id, user.role.value, action, result)
        return result

    def can_create_billing(self, user: User) -> bool:
        return self._check(user, _ADMIN, "can_create_billing")

    def can_edit_billing(self, user: User) -> bool:
        return self._check(user, _ADMIN, "can_edit_billing")

    def can_mark_paid(self, user: User) -> bool:
        return self._check(user, _OPERATORS, "can_mark_paid")

    def can_view_billings(self, user: User) -> bool:
        return self._check(user, _OPERATORS, "can_view_billings")

    def can_manage_settings(self, user: User) -> bool:
        return self._check(user, _ADMIN, "can_manage_settings")

    def can_manage_staff(self, user: User) -> bool:
        return self._check(user, _ADMIN, "can_manage_staff")

    def can_manage_users(self, user: User) -> bool:
        return self._check(user, _ADMIN, "can_manage_users")

    def can_manage_rooms(self, user: User) -> bool:
        return self._check(user, _OPERATORS, "can_manage_rooms")

    def can_manage_tenants(self, user: User) -> bool:
        return self._check(user, _OPERATORS, "can_manage_tenants")

    def can_manage_announcements(self, user: User) -> bool:
        return self._check(user, _OPERATORS, "can_manage_announcements")
