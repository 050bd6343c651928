from __future__ import annotations

import logging
from datetime import date, datetime

from dormkeep.constants import BKK_TZ
from dormkeep.errors import DormkeepError, RoomFullError
from dormkeep.models.room import Room, RoomStatus
from dormkeep.models.tenant import Occupancy, Tenant
from dormkeep.repositories.base import (
    OccupancyRepository,
    RoomRepository,
    TenantRepository,
    UserRepository,
)
from dormkeep.services.room_service import RoomService

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(BKK_TZ).date()


class TenantService:
    def __init__(
        self,
        tenant_repo: TenantRepository,
        occupancy_repo: OccupancyRepository,
        room_repo: RoomRepository,
        user_repo: UserRepository | None = None,
    ) -> None:
        self.tenant_repo = tenant_repo
        self.occupancy_repo = occupancy_repo
        self.room_repo = room_repo
        self.user_repo = user_repo
        self.rooms = RoomService(room_repo, occupancy_repo)

    def _check_room_available(self, room: Room) -> int:
        if room.id is None:
            raise ValueError("Room has no id")
        if room.status == RoomStatus.MAINTENANCE:
            logger.warning("Room %s rejected: under maintenance", room.room_number)
            raise RoomFullError(f"Room {room.room_number} is under maintenance")
        count = self.occupancy_repo.count_current_for_room(room.id)
        if count >= room.capacity:
            logger.warning("Room %s rejected: full (%d/%d)", room.room_number, count, room.capacity)
            raise RoomFullError(f"Room {room.room_number} is full ({count}/{room.capacity})")
        return room.id

    def onboard_tenant(self, tenant: Tenant, room: Room) -> Tenant:
        if not tenant.first_name.strip():
            raise DormkeepError("First name is required")
        room_id = self._check_room_available(room)

        created = self.tenant_repo.create(
            tenant.model_copy(update={"room_id": room_id, "room_number": room.room_number})
        )
        if created.id is None:
            raise RuntimeError("Tenant created without an id")
        self.occupancy_repo.create(Occupancy(tenant_id=created.id, room_id=room_id, check_in_date=_today()))
        self.rooms.refresh_status(room_id)
        logger.info("Tenant onboarded: id=%s, name=%s, room=%s", created.id, created.full_name, room.room_number)
        return created

    def check_out(self, tenant: Tenant) -> None:
        if tenant.id is None:
            raise ValueError("Cannot check out tenant without an id")
        occupancy = self.occupancy_repo.get_current_for_tenant(tenant.id)
        if occupancy is not None and occupancy.id is not None:
            self.occupancy_repo.close(occupancy.id, _today())
        self.tenant_repo.delete(tenant.id)
        if self.user_repo is not None:
            self.user_repo.unlink_tenant(tenant.id)
        if occupancy is not None:
            self.rooms.refresh_status(occupancy.room_id)
        logger.info("Tenant checked out: id=%s, name=%s", tenant.id, tenant.full_name)

    def assign_room(self, tenant: Tenant, room: Room) -> Tenant:
        if tenant.id is None:
            raise ValueError("Cannot move tenant without an id")
        current = self.occupancy_repo.get_current_for_tenant(tenant.id)
        if current is not None and current.room_id == room.id:
            raise DormkeepError(f"Tenant already lives in room {room.room_number}")
        room_id = self._check_room_available(room)

        if current is not None and current.id is not None:
            self.occupancy_repo.close(current.id, _today())
        self.occupancy_repo.create(Occupancy(tenant_id=tenant.id, room_id=room_id, check_in_date=_today()))
        self.tenant_repo.update_room(tenant.id, room_id, room.room_number)

        if current is not None:
            self.rooms.refresh_status(current.room_id)
        self.rooms.refresh_status(room_id)
        logger.info(
            "Tenant %s moved: room %s -> %s",
            tenant.id,
            tenant.room_number or "-",
            room.room_number,
        )
        return tenant.model_copy(update={"room_id": room_id, "room_number": room.room_number})

    def update_tenant(self, tenant: Tenant) -> Tenant:
        result = self.tenant_repo.update(tenant)
        logger.info("Tenant updated: id=%s, name=%s", result.id, result.full_name)
        return result

    def list_tenants(self) -> list[Tenant]:
        result = self.tenant_repo.list_active()
        logger.debug("Listed %d tenants", len(result))
        return result

    def get_tenant(self, tenant_id: int) -> Tenant | None:
        return self.tenant_repo.get_by_id(tenant_id)

    def get_tenant_by_uuid(self, uuid: str) -> Tenant | None:
        result = self.tenant_repo.get_by_uuid(uuid)
        logger.debug("get_tenant_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result
