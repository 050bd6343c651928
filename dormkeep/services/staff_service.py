from __future__ import annotations

import logging

from dormkeep.errors import DormkeepError
from dormkeep.models.staff import Staff
from dormkeep.repositories.base import StaffRepository

logger = logging.getLogger(__name__)


class StaffService:
    def __init__(self, repo: StaffRepository) -> None:
        self.repo = repo

    def create_staff(self, staff: Staff) -> Staff:
        if not staff.first_name.strip():
            raise DormkeepError("First name is required")
        result = self.repo.create(staff)
        logger.info("Staff created: id=%s, name=%s", result.id, result.full_name)
        return result

    def list_staff(self, include_inactive: bool = False) -> list[Staff]:
        result = self.repo.list_all(include_inactive)
        logger.debug("Listed %d staff (include_inactive=%s)", len(result), include_inactive)
        return result

    def get_staff_by_uuid(self, uuid: str) -> Staff | None:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_staff_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def update_staff(self, staff: Staff) -> Staff:
        result = self.repo.update(staff)
        logger.info("Staff updated: id=%s, name=%s", result.id, result.full_name)
        return result

    def deactivate(self, staff: Staff) -> None:
        if staff.id is None:
            raise ValueError("Cannot deactivate staff without an id")
        if not staff.is_active:
            logger.warning("Deactivate rejected: staff %s is already inactive", staff.id)
            raise DormkeepError("Staff member is already inactive")
        self.repo.set_active(staff.id, False)
        logger.info("Staff %s deactivated", staff.id)
