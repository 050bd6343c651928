from __future__ import annotations

import json
from datetime import date, datetime

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError
from ulid import ULID

from dormkeep.constants import BKK_TZ
from dormkeep.errors import DuplicateBillingError
from dormkeep.models.announcement import Announcement
from dormkeep.models.audit_log import AuditLog
from dormkeep.models.billing import Billing, BillingStatus
from dormkeep.models.room import Room, RoomOccupancy, RoomStatus
from dormkeep.models.staff import Staff
from dormkeep.models.system_settings import SystemSettings
from dormkeep.models.tenant import Occupancy, Tenant
from dormkeep.models.user import User, UserRole
from dormkeep.repositories.base import (
    AnnouncementRepository,
    AuditLogRepository,
    BillingRepository,
    OccupancyRepository,
    RoomRepository,
    SettingsRepository,
    StaffRepository,
    TenantRepository,
    UserRepository,
)


def _now() -> datetime:
    return datetime.now(BKK_TZ)


def _iso(value: date | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


class SQLAlchemyRoomRepository(RoomRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_room(row: RowMapping) -> Room:
        return Room(
            id=row["id"],
            uuid=row["uuid"],
            room_number=row["room_number"],
            room_type=row["room_type"],
            floor=row["floor"],
            capacity=row["capacity"],
            latest_meter_reading=row["latest_meter_reading"],
            status=RoomStatus(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, room: Room) -> Room:
        room_uuid = str(ULID())
        now = _now()
        self.conn.execute(
            text(
                "INSERT INTO rooms (uuid, room_number, room_type, floor, capacity, "
                "latest_meter_reading, status, created_at, updated_at) "
                "VALUES (:uuid, :room_number, :room_type, :floor, :capacity, "
                ":latest_meter_reading, :status, :created_at, :updated_at)"
            ),
            {
                "uuid": room_uuid,
                "room_number": room.room_number,
                "room_type": room.room_type,
                "floor": room.floor,
                "capacity": room.capacity,
                "latest_meter_reading": room.latest_meter_reading,
                "status": room.status.value,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        result = self.get_by_uuid(room_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve room after create (uuid={room_uuid})")
        return result

    def _fetch_one(self, where: str, params: dict) -> Room | None:
        row = self.conn.execute(text(f"SELECT * FROM rooms WHERE {where}"), params).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_room(row)

    def get_by_id(self, room_id: int) -> Room | None:
        return self._fetch_one("id = :id", {"id": room_id})

    def get_by_uuid(self, uuid: str) -> Room | None:
        return self._fetch_one("uuid = :uuid", {"uuid": uuid})

    def get_by_number(self, room_number: str) -> Room | None:
        return self._fetch_one("room_number = :room_number", {"room_number": room_number})

    def list_all(self, status: RoomStatus | None = None) -> list[Room]:
        if status is None:
            rows = self.conn.execute(text("SELECT * FROM rooms ORDER BY floor, room_number")).mappings().fetchall()
        else:
            rows = (
                self.conn.execute(
                    text("SELECT * FROM rooms WHERE status = :status ORDER BY floor, room_number"),
                    {"status": status.value},
                )
                .mappings()
                .fetchall()
            )
        return [self._row_to_room(row) for row in rows]

    def update(self, room: Room) -> Room:
        if room.id is None:
            raise ValueError("Cannot update room without an id")
        self.conn.execute(
            text(
                "UPDATE rooms SET room_number = :room_number, room_type = :room_type, floor = :floor, "
                "capacity = :capacity, status = :status, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "room_number": room.room_number,
                "room_type": room.room_type,
                "floor": room.floor,
                "capacity": room.capacity,
                "status": room.status.value,
                "updated_at": _now(),
                "id": room.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(room.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve room after update (id={room.id})")
        return result

    def update_status(self, room_id: int, status: RoomStatus) -> None:
        self.conn.execute(
            text("UPDATE rooms SET status = :status, updated_at = :updated_at WHERE id = :id"),
            {"status": status.value, "updated_at": _now(), "id": room_id},
        )
        self.conn.commit()

    def update_meter_reading(self, room_id: int, reading: int) -> None:
        self.conn.execute(
            text("UPDATE rooms SET latest_meter_reading = :reading, updated_at = :updated_at WHERE id = :id"),
            {"reading": reading, "updated_at": _now(), "id": room_id},
        )
        self.conn.commit()

    def list_occupancy(self) -> list[RoomOccupancy]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT r.id AS room_id, r.room_number, r.latest_meter_reading, o.tenant_id "
                    "FROM rooms r JOIN occupancy o ON o.room_id = r.id AND o.is_current = :current "
                    "ORDER BY r.id, o.check_in_date, o.id"
                ),
                {"current": True},
            )
            .mappings()
            .fetchall()
        )
        by_room: dict[int, RoomOccupancy] = {}
        for row in rows:
            snapshot = by_room.get(row["room_id"])
            if snapshot is None:
                snapshot = RoomOccupancy(
                    room_id=row["room_id"],
                    room_number=row["room_number"],
                    latest_meter_reading=row["latest_meter_reading"] or 0,
                )
                by_room[row["room_id"]] = snapshot
            snapshot.tenant_ids.append(row["tenant_id"])
            snapshot.occupant_count += 1
        return list(by_room.values())


class SQLAlchemyTenantRepository(TenantRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_tenant(row: RowMapping) -> Tenant:
        return Tenant(
            id=row["id"],
            uuid=row["uuid"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
            address=row["address"],
            emergency_contact=row["emergency_contact"],
            residents=row["residents"],
            room_id=row["room_id"],
            room_number=row["room_number"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def create(self, tenant: Tenant) -> Tenant:
        tenant_uuid = str(ULID())
        now = _now()
        self.conn.execute(
            text(
                "INSERT INTO tenants (uuid, first_name, last_name, email, phone, address, "
                "emergency_contact, residents, room_id, room_number, created_at, updated_at) "
                "VALUES (:uuid, :first_name, :last_name, :email, :phone, :address, "
                ":emergency_contact, :residents, :room_id, :room_number, :created_at, :updated_at)"
            ),
            {
                "uuid": tenant_uuid,
                "first_name": tenant.first_name,
                "last_name": tenant.last_name,
                "email": tenant.email,
                "phone": tenant.phone,
                "address": tenant.address,
                "emergency_contact": tenant.emergency_contact,
                "residents": tenant.residents,
                "room_id": tenant.room_id,
                "room_number": tenant.room_number,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        result = self.get_by_uuid(tenant_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve tenant after create (uuid={tenant_uuid})")
        return result

    def get_by_id(self, tenant_id: int) -> Tenant | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM tenants WHERE id = :id AND deleted_at IS NULL"),
                {"id": tenant_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_tenant(row)

    def get_by_uuid(self, uuid: str) -> Tenant | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM tenants WHERE uuid = :uuid AND deleted_at IS NULL"),
                {"uuid": uuid},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_tenant(row)

    def list_active(self) -> list[Tenant]:
        rows = (
            self.conn.execute(text("SELECT * FROM tenants WHERE deleted_at IS NULL ORDER BY created_at DESC"))
            .mappings()
            .fetchall()
        )
        return [self._row_to_tenant(row) for row in rows]

    def update(self, tenant: Tenant) -> Tenant:
        if tenant.id is None:
            raise ValueError("Cannot update tenant without an id")
        self.conn.execute(
            text(
                "UPDATE tenants SET first_name = :first_name, last_name = :last_name, email = :email, "
                "phone = :phone, address = :address, emergency_contact = :emergency_contact, "
                "residents = :residents, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "first_name": tenant.first_name,
                "last_name": tenant.last_name,
                "email": tenant.email,
                "phone": tenant.phone,
                "address": tenant.address,
                "emergency_contact": tenant.emergency_contact,
                "residents": tenant.residents,
                "updated_at": _now(),
                "id": tenant.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(tenant.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve tenant after update (id={tenant.id})")
        return result

    def update_room(self, tenant_id: int, room_id: int | None, room_number: str) -> None:
        self.conn.execute(
            text(
                "UPDATE tenants SET room_id = :room_id, room_number = :room_number, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {"room_id": room_id, "room_number": room_number, "updated_at": _now(), "id": tenant_id},
        )
        self.conn.commit()

    def delete(self, tenant_id: int) -> None:
        self.conn.execute(
            text("UPDATE tenants SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": tenant_id},
        )
        self.conn.commit()


class SQLAlchemyOccupancyRepository(OccupancyRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_occupancy(row: RowMapping) -> Occupancy:
        return Occupancy(
            id=row["id"],
            tenant_id=row["tenant_id"],
            room_id=row["room_id"],
            check_in_date=row["check_in_date"],
            check_out_date=row["check_out_date"],
            is_current=bool(row["is_current"]),
            created_at=row["created_at"],
        )

    def create(self, occupancy: Occupancy) -> Occupancy:
        result = self.conn.execute(
            text(
                "INSERT INTO occupancy (tenant_id, room_id, check_in_date, check_out_date, is_current, created_at) "
                "VALUES (:tenant_id, :room_id, :check_in_date, :check_out_date, :is_current, :created_at)"
            ),
            {
                "tenant_id": occupancy.tenant_id,
                "room_id": occupancy.room_id,
                "check_in_date": _iso(occupancy.check_in_date),
                "check_out_date": _iso(occupancy.check_out_date),
                "is_current": occupancy.is_current,
                "created_at": _now(),
            },
        )
        occupancy_id = result.lastrowid
        self.conn.commit()
        row = (
            self.conn.execute(text("SELECT * FROM occupancy WHERE id = :id"), {"id": occupancy_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            raise RuntimeError(f"Failed to retrieve occupancy after create (id={occupancy_id})")
        return self._row_to_occupancy(row)

    def get_current_for_tenant(self, tenant_id: int) -> Occupancy | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM occupancy WHERE tenant_id = :tenant_id AND is_current = :current"),
                {"tenant_id": tenant_id, "current": True},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_occupancy(row)

    def list_current_for_room(self, room_id: int) -> list[Occupancy]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM occupancy WHERE room_id = :room_id AND is_current = :current "
                    "ORDER BY check_in_date, id"
                ),
                {"room_id": room_id, "current": True},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_occupancy(row) for row in rows]

    def count_current_for_room(self, room_id: int) -> int:
        count = self.conn.execute(
            text("SELECT COUNT(*) FROM occupancy WHERE room_id = :room_id AND is_current = :current"),
            {"room_id": room_id, "current": True},
        ).scalar()
        return int(count or 0)

    def close(self, occupancy_id: int, check_out_date: date) -> None:
        self.conn.execute(
            text("UPDATE occupancy SET is_current = :current, check_out_date = :check_out_date WHERE id = :id"),
            {"current": False, "check_out_date": _iso(check_out_date), "id": occupancy_id},
        )
        self.conn.commit()


class SQLAlchemyBillingRepository(BillingRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    _SELECT = "SELECT b.*, r.room_number AS room_number FROM billings b JOIN rooms r ON r.id = b.room_id"

    @staticmethod
    def _row_to_billing(row: RowMapping) -> Billing:
        return Billing(
            id=row["id"],
            uuid=row["uuid"],
            room_id=row["room_id"],
            room_number=row["room_number"],
            tenant_id=row["tenant_id"],
            billing_month=row["billing_month"],
            room_rent=row["room_rent"],
            water_units=row["water_units"],
            water_cost=row["water_cost"],
            electricity_units=row["electricity_units"],
            electricity_cost=row["electricity_cost"],
            total_amount=row["total_amount"],
            previous_meter_reading=row["previous_meter_reading"],
            current_meter_reading=row["current_meter_reading"],
            due_date=row["due_date"],
            paid_date=row["paid_date"],
            status=BillingStatus(row["status"]),
            receipt_number=row["receipt_number"],
            edited_by=row["edited_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, billing: Billing) -> Billing:
        billing_uuid = str(ULID())
        now = _now()
        try:
            self.conn.execute(
                text(
                    "INSERT INTO billings (uuid, room_id, tenant_id, billing_month, room_rent, water_units, "
                    "water_cost, electricity_units, electricity_cost, total_amount, previous_meter_reading, "
                    "current_meter_reading, due_date, status, receipt_number, created_at, updated_at) "
                    "VALUES (:uuid, :room_id, :tenant_id, :billing_month, :room_rent, :water_units, "
                    ":water_cost, :electricity_units, :electricity_cost, :total_amount, :previous_meter_reading, "
                    ":current_meter_reading, :due_date, :status, :receipt_number, :created_at, :updated_at)"
                ),
                {
                    "uuid": billing_uuid,
                    "room_id": billing.room_id,
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
                    "status": billing.status.value,
                    "receipt_number": billing.receipt_number,
                    "created_at": now,
                    "updated_at": now,
                },
            )
            self.conn.commit()
        except IntegrityError as exc:
            self.conn.rollback()
            raise DuplicateBillingError(
                f"A bill for {billing.billing_month:%Y-%m} already exists for this room"
            ) from exc
        result = self.get_by_uuid(billing_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve billing after create (uuid={billing_uuid})")
        return result

    def get_by_id(self, billing_id: int) -> Billing | None:
        row = self.conn.execute(text(f"{self._SELECT} WHERE b.id = :id"), {"id": billing_id}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_billing(row)

    def get_by_uuid(self, uuid: str) -> Billing | None:
        row = self.conn.execute(text(f"{self._SELECT} WHERE b.uuid = :uuid"), {"uuid": uuid}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_billing(row)

    def exists_for_month(self, room_id: int, billing_month: date) -> bool:
        row = self.conn.execute(
            text("SELECT id FROM billings WHERE room_id = :room_id AND billing_month = :billing_month"),
            {"room_id": room_id, "billing_month": _iso(billing_month)},
        ).fetchone()
        return row is not None

    def list_all(self, billing_month: date | None = None) -> list[Billing]:
        if billing_month is None:
            rows = (
                self.conn.execute(text(f"{self._SELECT} ORDER BY b.billing_month DESC, r.room_number"))
                .mappings()
                .fetchall()
            )
        else:
            rows = (
                self.conn.execute(
                    text(f"{self._SELECT} WHERE b.billing_month = :billing_month ORDER BY r.room_number"),
                    {"billing_month": _iso(billing_month)},
                )
                .mappings()
                .fetchall()
            )
        return [self._row_to_billing(row) for row in rows]

    def update_charges(self, billing: Billing) -> Billing:
        if billing.id is None:
            raise ValueError("Cannot update billing without an id")
        self.conn.execute(
            text(
                "UPDATE billings SET electricity_units = :electricity_units, "
                "electricity_cost = :electricity_cost, total_amount = :total_amount, "
                "current_meter_reading = :current_meter_reading, edited_by = :edited_by, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {
                "electricity_units": billing.electricity_units,
                "electricity_cost": billing.electricity_cost,
                "total_amount": billing.total_amount,
                "current_meter_reading": billing.current_meter_reading,
                "edited_by": billing.edited_by,
                "updated_at": _now(),
                "id": billing.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(billing.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve billing after update (id={billing.id})")
        return result

    def mark_paid(self, billing_id: int, paid_date: datetime) -> None:
        self.conn.execute(
            text(
                "UPDATE billings SET status = :status, paid_date = :paid_date, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {"status": BillingStatus.PAID.value, "paid_date": paid_date, "updated_at": _now(), "id": billing_id},
        )
        self.conn.commit()


class SQLAlchemySettingsRepository(SettingsRepository):
    """Single-row table; the row always has id = 1."""

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def get(self) -> SystemSettings | None:
        row = self.conn.execute(text("SELECT * FROM system_settings WHERE id = 1")).mappings().fetchone()
        if row is None:
            return None
        return SystemSettings(
            water_rate=row["water_rate"],
            electricity_rate=row["electricity_rate"],
            room_rent=row["room_rent"],
            late_fee=row["late_fee"],
            floor_count=row["floor_count"],
            updated_by=row["updated_by"],
            updated_at=row["updated_at"],
        )

    def save(self, system_settings: SystemSettings) -> SystemSettings:
        params = {
            "water_rate": system_settings.water_rate,
            "electricity_rate": system_settings.electricity_rate,
            "room_rent": system_settings.room_rent,
            "late_fee": system_settings.late_fee,
            "floor_count": system_settings.floor_count,
            "updated_by": system_settings.updated_by,
            "updated_at": _now(),
        }
        if self.get() is None:
            self.conn.execute(
                text(
                    "INSERT INTO system_settings (id, water_rate, electricity_rate, room_rent, late_fee, "
                    "floor_count, updated_by, updated_at) VALUES (1, :water_rate, :electricity_rate, "
                    ":room_rent, :late_fee, :floor_count, :updated_by, :updated_at)"
                ),
                params,
            )
        else:
            self.conn.execute(
                text(
                    "UPDATE system_settings SET water_rate = :water_rate, electricity_rate = :electricity_rate, "
                    "room_rent = :room_rent, late_fee = :late_fee, floor_count = :floor_count, "
                    "updated_by = :updated_by, updated_at = :updated_at WHERE id = 1"
                ),
                params,
            )
        self.conn.commit()
        result = self.get()
        if result is None:
            raise RuntimeError("Failed to retrieve system settings after save")
        return result


class SQLAlchemyStaffRepository(StaffRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_staff(row: RowMapping) -> Staff:
        return Staff(
            id=row["id"],
            uuid=row["uuid"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
            position=row["position"],
            is_active=bool(row["is_active"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, staff: Staff) -> Staff:
        staff_uuid = str(ULID())
        now = _now()
        self.conn.execute(
            text(
                "INSERT INTO staffs (uuid, first_name, last_name, email, phone, position, is_active, "
                "created_at, updated_at) VALUES (:uuid, :first_name, :last_name, :email, :phone, "
                ":position, :is_active, :created_at, :updated_at)"
            ),
            {
                "uuid": staff_uuid,
                "first_name": staff.first_name,
                "last_name": staff.last_name,
                "email": staff.email,
                "phone": staff.phone,
                "position": staff.position,
                "is_active": staff.is_active,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        result = self.get_by_uuid(staff_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve staff after create (uuid={staff_uuid})")
        return result

    def get_by_id(self, staff_id: int) -> Staff | None:
        row = self.conn.execute(text("SELECT * FROM staffs WHERE id = :id"), {"id": staff_id}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_staff(row)

    def get_by_uuid(self, uuid: str) -> Staff | None:
        row = (
            self.conn.execute(text("SELECT * FROM staffs WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_staff(row)

    def list_all(self, include_inactive: bool = False) -> list[Staff]:
        if include_inactive:
            rows = self.conn.execute(text("SELECT * FROM staffs ORDER BY created_at DESC")).mappings().fetchall()
        else:
            rows = (
                self.conn.execute(
                    text("SELECT * FROM staffs WHERE is_active = :active ORDER BY created_at DESC"),
                    {"active": True},
                )
                .mappings()
                .fetchall()
            )
        return [self._row_to_staff(row) for row in rows]

    def update(self, staff: Staff) -> Staff:
        if staff.id is None:
            raise ValueError("Cannot update staff without an id")
        self.conn.execute(
            text(
                "UPDATE staffs SET first_name = :first_name, last_name = :last_name, email = :email, "
                "phone = :phone, position = :position, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "first_name": staff.first_name,
                "last_name": staff.last_name,
                "email": staff.email,
                "phone": staff.phone,
                "position": staff.position,
                "updated_at": _now(),
                "id": staff.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(staff.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve staff after update (id={staff.id})")
        return result

    def set_active(self, staff_id: int, is_active: bool) -> None:
        self.conn.execute(
            text("UPDATE staffs SET is_active = :active, updated_at = :updated_at WHERE id = :id"),
            {"active": is_active, "updated_at": _now(), "id": staff_id},
        )
        self.conn.commit()


class SQLAlchemyAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_announcement(row: RowMapping) -> Announcement:
        return Announcement(
            id=row["id"],
            uuid=row["uuid"],
            title=row["title"],
            content=row["content"],
            publish_date=row["publish_date"],
            important=bool(row["important"]),
            created_by=row["created_by"],
            created_at=row["created_at"],
        )

    def create(self, announcement: Announcement) -> Announcement:
        announcement_uuid = str(ULID())
        self.conn.execute(
            text(
                "INSERT INTO announcements (uuid, title, content, publish_date, important, created_by, created_at) "
                "VALUES (:uuid, :title, :content, :publish_date, :important, :created_by, :created_at)"
            ),
            {
                "uuid": announcement_uuid,
                "title": announcement.title,
                "content": announcement.content,
                "publish_date": _iso(announcement.publish_date),
                "important": announcement.important,
                "created_by": announcement.created_by,
                "created_at": _now(),
            },
        )
        self.conn.commit()
        result = self.get_by_uuid(announcement_uuid)
        if result is None:
            raise RuntimeError(f"Failed to retrieve announcement after create (uuid={announcement_uuid})")
        return result

    def get_by_uuid(self, uuid: str) -> Announcement | None:
        row = (
            self.conn.execute(text("SELECT * FROM announcements WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_announcement(row)

    def list_since(self, since: date) -> list[Announcement]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM announcements WHERE publish_date >= :since ORDER BY publish_date DESC, id DESC"),
                {"since": _iso(since)},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_announcement(row) for row in rows]

    def delete(self, announcement_id: int) -> None:
        self.conn.execute(text("DELETE FROM announcements WHERE id = :id"), {"id": announcement_id})
        self.conn.commit()


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_user(row: RowMapping) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            email=row.get("email", ""),
            password_hash=row["password_hash"],
            role=UserRole(row["role"]),
            tenant_id=row["tenant_id"],
            staff_id=row["staff_id"],
            created_at=row["created_at"],
        )

    def create(self, user: User) -> User:
        self.conn.execute(
            text(
                "INSERT INTO users (username, email, password_hash, role, tenant_id, staff_id, created_at) "
                "VALUES (:username, :email, :password_hash, :role, :tenant_id, :staff_id, :created_at)"
            ),
            {
                "username": user.username,
                "email": user.email,
                "password_hash": user.password_hash,
                "role": user.role.value,
                "tenant_id": user.tenant_id,
                "staff_id": user.staff_id,
                "created_at": _now(),
            },
        )
        self.conn.commit()
        result = self.get_by_username(user.username)
        if result is None:
            raise RuntimeError(f"Failed to retrieve user after create (username={user.username})")
        return result

    def get_by_id(self, user_id: int) -> User | None:
        row = self.conn.execute(text("SELECT * FROM users WHERE id = :id"), {"id": user_id}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def get_by_username(self, username: str) -> User | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM users WHERE username = :username"),
                {"username": username},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_user(row)

    def list_all(self) -> list[User]:
        rows = self.conn.execute(text("SELECT * FROM users ORDER BY created_at DESC")).mappings().fetchall()
        return [self._row_to_user(row) for row in rows]

    def update_password_hash(self, username: str, password_hash: str) -> None:
        self.conn.execute(
            text("UPDATE users SET password_hash = :password_hash WHERE username = :username"),
            {"password_hash": password_hash, "username": username},
        )
        self.conn.commit()

    def unlink_tenant(self, tenant_id: int) -> None:
        self.conn.execute(
            text("UPDATE users SET tenant_id = NULL WHERE tenant_id = :tenant_id"),
            {"tenant_id": tenant_id},
        )
        self.conn.commit()


class SQLAlchemyAuditLogRepository(AuditLogRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_audit_log(row: RowMapping) -> AuditLog:
        previous_state = row["previous_state"]
        if isinstance(previous_state, str):
            previous_state = json.loads(previous_state)
        new_state = row["new_state"]
        if isinstance(new_state, str):
            new_state = json.loads(new_state)
        metadata = row["metadata"]
        if isinstance(metadata, str):
            metadata = json.loads(metadata)

        return AuditLog(
            id=row["id"],
            uuid=row["uuid"],
            event_type=row["event_type"],
            actor_id=row["actor_id"],
            actor_username=row["actor_username"],
            source=row["source"],
            entity_type=row["entity_type"],
            entity_id=row["entity_id"],
            entity_uuid=row["entity_uuid"],
            previous_state=previous_state,
            new_state=new_state,
            metadata=metadata,
            created_at=row["created_at"],
        )

    def create(self, audit_log: AuditLog) -> AuditLog:
        audit_uuid = str(ULID())
        self.conn.execute(
            text(
                "INSERT INTO audit_logs (uuid, event_type, actor_id, actor_username, "
                "source, entity_type, entity_id, entity_uuid, previous_state, "
                "new_state, metadata, created_at) "
                "VALUES (:uuid, :event_type, :actor_id, :actor_username, "
                ":source, :entity_type, :entity_id, :entity_uuid, :previous_state, "
                ":new_state, :metadata, :created_at)"
            ),
            {
                "uuid": audit_uuid,
                "event_type": audit_log.event_type,
                "actor_id": audit_log.actor_id,
                "actor_username": audit_log.actor_username,
                "source": audit_log.source,
                "entity_type": audit_log.entity_type,
                "entity_id": audit_log.entity_id,
                "entity_uuid": audit_log.entity_uuid,
                "previous_state": json.dumps(audit_log.previous_state)
                if audit_log.previous_state is not None
                else None,
                "new_state": json.dumps(audit_log.new_state) if audit_log.new_state is not None else None,
                "metadata": json.dumps(audit_log.metadata),
                "created_at": _now(),
            },
        )
        self.conn.commit()

        row = (
            self.conn.execute(
                text("SELECT * FROM audit_logs WHERE uuid = :uuid"),
                {"uuid": audit_uuid},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            raise RuntimeError(f"Failed to retrieve audit log after create (uuid={audit_uuid})")
        return self._row_to_audit_log(row)

    def list_by_entity(self, entity_type: str, entity_id: int) -> list[AuditLog]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM audit_logs WHERE entity_type = :entity_type AND entity_id = :entity_id "
                    "ORDER BY created_at DESC, id DESC"
                ),
                {"entity_type": entity_type, "entity_id": entity_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_audit_log(row) for row in rows]

    def list_by_actor(self, actor_id: int, limit: int = 50) -> list[AuditLog]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM audit_logs WHERE actor_id = :actor_id ORDER BY created_at DESC, id DESC LIMIT :limit"),
                {"actor_id": actor_id, "limit": limit},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_audit_log(row) for row in rows]

    def list_recent(self, limit: int = 50) -> list[AuditLog]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM audit_logs ORDER BY created_at DESC, id DESC LIMIT :limit"),
                {"limit": limit},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_audit_log(row) for row in rows]
