from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel


class Tenant(BaseModel):
    id: int | None = None
    uuid: str = ""
    first_name: str
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    emergency_contact: str = ""
    residents: str = ""
    room_id: int | None = None
    room_number: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Occupancy(BaseModel):
    id: int | None = None
    tenant_id: int
    room_id: int
    check_in_date: date
    check_out_date: date | None = None
    is_current: bool = True
    created_at: datetime | None = None
