from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class RoomStatus(str, Enum):
    VACANT = "vacant"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class Room(BaseModel):
    id: int | None = None
    uuid: str = ""
    room_number: str
    room_type: str = ""
    floor: int = 1
    capacity: int = 1
    latest_meter_reading: int = 0
    status: RoomStatus = RoomStatus.VACANT
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RoomOccupancy(BaseModel):
    """Billing snapshot of a room: who lives there and where the meter stands."""

    room_id: int
    room_number: str
    occupant_count: int = 0
    latest_meter_reading: int = 0
    tenant_ids: list[int] = []
