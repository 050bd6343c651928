"""Request bodies and response shaping for the JSON API."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from dormkeep.models.billing import Billing, BillingRunResult
from dormkeep.models.room import RoomStatus
from dormkeep.models.tenant import Tenant
from dormkeep.models.user import User, UserRole


class LoginRequest(BaseModel):
    username: str
    password: str


class RoomCreate(BaseModel):
    room_number: str = Field(min_length=1)
    room_type: str = ""
    floor: int = Field(default=1, ge=1)
    capacity: int = Field(default=1, ge=1)


class RoomUpdate(BaseModel):
    room_number: str | None = Field(default=None, min_length=1)
    room_type: str | None = None
    floor: int | None = Field(default=None, ge=1)
    capacity: int | None = Field(default=None, ge=1)


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


class TenantCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    emergency_contact: str = ""
    residents: str = ""
    room_uuid: str


class TenantUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    emergency_contact: str | None = None
    residents: str | None = None


class TenantMove(BaseModel):
    room_uuid: str


class StaffCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = ""
    email: str = ""
    phone: str = ""
    position: str = ""


class StaffUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    position: str | None = None


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1)
    content: str = ""
    important: bool = False
    publish_date: date | None = None


class SettingsUpdate(BaseModel):
    water_rate: int = Field(ge=0)
    electricity_rate: int = Field(ge=0)
    room_rent: int = Field(ge=0)
    late_fee: int = Field(default=0, ge=0)
    floor_count: int = Field(default=1, ge=1)


class BillingRunRequest(BaseModel):
    billing_month: date
    due_date: date | None = None
    # room number -> current meter reading; rooms left out keep their stored reading
    readings: dict[str, int] = {}


class BillingEdit(BaseModel):
    current_meter_reading: int = Field(ge=0)


class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    email: str = ""
    role: UserRole = UserRole.TENANT
    tenant_id: int | None = None
    staff_id: int | None = None


def billing_out(billing: Billing) -> dict:
    data = billing.model_dump(mode="json")
    data["payment_status"] = billing.payment_status.value
    return data


def tenant_out(tenant: Tenant) -> dict:
    data = tenant.model_dump(mode="json")
    data["full_name"] = tenant.full_name
    return data


def user_out(user: User) -> dict:
    return user.model_dump(mode="json", exclude={"password_hash"})


def run_result_out(result: BillingRunResult) -> dict:
    return {
        "billing_month": result.billing_month.isoformat(),
        "due_date": result.due_date.isoformat(),
        "ok": result.ok,
        "partial": result.partial,
        "errors": result.errors,
        "outcomes": [
            {
                "room_id": o.room_id,
                "room_number": o.room_number,
                "ok": o.ok,
                "error": o.error,
                "billing": billing_out(o.billing) if o.billing else None,
            }
            for o in result.outcomes
        ],
    }
