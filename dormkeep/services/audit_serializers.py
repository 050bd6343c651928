"""Turn models into JSON-safe dicts for the audit log's state columns.

Password hashes never leave the users table. Dates become ISO strings.
"""

from __future__ import annotations

from datetime import date

from dormkeep.models.announcement import Announcement
from dormkeep.models.billing import Billing
from dormkeep.models.room import Room
from dormkeep.models.staff import Staff
from dormkeep.models.system_settings import SystemSettings
from dormkeep.models.tenant import Tenant
from dormkeep.models.user import User


def _iso(val: date | None) -> str | None:
    if val is None:
        return None
    return val.isoformat()


def serialize_billing(billing: Billing) -> dict:
    return {
        "id": billing.id,
        "uuid": billing.uuid,
        "room_id": billing.room_id,
        "room_number": billing.room_number,
        "tenant_id": billing.tenant_id,
        "billing_month": _iso(billing.billing_month),
        "room_rent": billing.room_rent,
        "water_units": billing.water_units,
        "water_cost": billing.water_cost,
        "electricity_units": billing.electricity_units,
        "electricity_cost": billing.electricity_cost,
        "total_amount": billing.total_amount,
        "previous_meter_reading": billing.previous_meter_reading,
        "current_meter_reading": billing.current_meter_reading,
        "due_date": _iso(billing.due_date),
        "paid_date": _iso(billing.paid_date),
        "status": billing.status.value,
        "receipt_number": billing.receipt_number,
        "edited_by": billing.edited_by,
    }


def serialize_room(room: Room) -> dict:
    return {
        "id": room.id,
        "uuid": room.uuid,
        "room_number": room.room_number,
        "room_type": room.room_type,
        "floor": room.floor,
        "capacity": room.capacity,
        "latest_meter_reading": room.latest_meter_reading,
        "status": room.status.value,
    }


def serialize_tenant(tenant: Tenant) -> dict:
    return {
        "id": tenant.id,
        "uuid": tenant.uuid,
        "first_name": tenant.first_name,
        "last_name": tenant.last_name,
        "email": tenant.email,
        "phone": tenant.phone,
        "room_id": tenant.room_id,
        "room_number": tenant.room_number,
        "deleted_at": _iso(tenant.deleted_at),
    }


def serialize_staff(staff: Staff) -> dict:
    return {
        "id": staff.id,
        "uuid": staff.uuid,
        "first_name": staff.first_name,
        "last_name": staff.last_name,
        "email": staff.email,
        "phone": staff.phone,
        "position": staff.position,
        "is_active": staff.is_active,
    }


def serialize_settings(system_settings: SystemSettings) -> dict:
    return {
        "water_rate": system_settings.water_rate,
        "electricity_rate": system_settings.electricity_rate,
        "room_rent": system_settings.room_rent,
        "late_fee": system_settings.late_fee,
        "floor_count": system_settings.floor_count,
        "updated_by": system_settings.updated_by,
    }


def serialize_announcement(announcement: Announcement) -> dict:
    return {
        "id": announcement.id,
        "uuid": announcement.uuid,
        "title": announcement.title,
        "publish_date": _iso(announcement.publish_date),
        "important": announcement.important,
        "created_by": announcement.created_by,
    }


def serialize_user(user: User) -> dict:
    """Excludes password_hash."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "role": user.role.value,
        "tenant_id": user.tenant_id,
        "staff_id": user.staff_id,
        "created_at": _iso(user.created_at),
    }
