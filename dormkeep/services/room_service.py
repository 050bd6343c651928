from __future__ import annotations

import logging

from dormkeep.errors import DormkeepError
from dormkeep.models.room import Room, RoomOccupancy, RoomStatus
from dormkeep.repositories.base import OccupancyRepository, RoomRepository
from dormkeep.services.billing_calculator import room_sort_key

logger = logging.getLogger(__name__)


class RoomService:
    def __init__(self, room_repo: RoomRepository, occupancy_repo: OccupancyRepository) -> None:
        self.room_repo = room_repo
        self.occupancy_repo = occupancy_repo

    def create_room(self, room_number: str, room_type: str = "", floor: int = 1, capacity: int = 1) -> Room:
        room_number = room_number.strip()
        if not room_number:
            raise DormkeepError("Room number is required")
        if capacity < 1:
            raise DormkeepError("Capacity must be at least 1")
        if self.room_repo.get_by_number(room_number) is not None:
            logger.warning("Room create rejected: number %s already exists", room_number)
            raise DormkeepError(f"Room '{room_number}' already exists")
        room = Room(
            room_number=room_number,
            room_type=room_type,
            floor=floor,
            capacity=capacity,
            latest_meter_reading=0,
            status=RoomStatus.VACANT,
        )
        result = self.room_repo.create(room)
        logger.info("Room created: id=%s, number=%s", result.id, result.room_number)
        return result

    def list_rooms(self, status: RoomStatus | None = None) -> list[Room]:
        result = self.room_repo.list_all(status)
        logger.debug("Listed %d rooms (status=%s)", len(result), status)
        return result

    def get_room(self, room_id: int) -> Room | None:
        return self.room_repo.get_by_id(room_id)

    def get_room_by_uuid(self, uuid: str) -> Room | None:
        result = self.room_repo.get_by_uuid(uuid)
        logger.debug("get_room_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def update_room(self, room: Room) -> Room:
        if room.capacity < 1:
            raise DormkeepError("Capacity must be at least 1")
        existing = self.room_repo.get_by_number(room.room_number)
        if existing is not None and existing.id != room.id:
            logger.warning("Room update rejected: number %s already taken", room.room_number)
            raise DormkeepError(f"Room '{room.room_number}' already exists")
        result = self.room_repo.update(room)
        logger.info("Room updated: id=%s, number=%s", result.id, result.room_number)
        return result

    def change_status(self, room: Room, status: RoomStatus) -> Room:
        if room.id is None:
            raise ValueError("Cannot change status of room without an id")
        self.room_repo.update_status(room.id, status)
        logger.info("Room %s status changed: %s -> %s", room.room_number, room.status.value, status.value)
        return room.model_copy(update={"status": status})

    def occupant_count(self, room_id: int) -> int:
        return self.occupancy_repo.count_current_for_room(room_id)

    def occupancy_snapshot(self) -> list[RoomOccupancy]:
        """Rooms with at least one current occupant, in numeric room-number order."""
        result = sorted(self.room_repo.list_occupancy(), key=lambda s: room_sort_key(s.room_number))
        logger.debug("Occupancy snapshot: %d occupied rooms", len(result))
        return result

    def refresh_status(self, room_id: int) -> RoomStatus | None:
        """Recompute a room's status from its current occupant count.

        Rooms under maintenance are left alone.
        """
        room = self.room_repo.get_by_id(room_id)
        if room is None:
            return None
        if room.status == RoomStatus.MAINTENANCE:
            return room.status
        count = self.occupancy_repo.count_current_for_room(room_id)
        status = RoomStatus.OCCUPIED if count >= room.capacity else RoomStatus.VACANT
        if status != room.status:
            self.room_repo.update_status(room_id, status)
            logger.info("Room %s status recomputed: %s (%d/%d)", room.room_number, status.value, count, room.capacity)
        return status
