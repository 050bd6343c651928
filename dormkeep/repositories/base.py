from abc import ABC, abstractmethod
from datetime import date, datetime

from dormkeep.models.announcement import Announcement
from dormkeep.models.audit_log import AuditLog
from dormkeep.models.billing import Billing
from dormkeep.models.room import Room, RoomOccupancy, RoomStatus
from dormkeep.models.staff import Staff
from dormkeep.models.system_settings import SystemSettings
from dormkeep.models.tenant import Occupancy, Tenant
from dormkeep.models.user import User


class RoomRepository(ABC):
    @abstractmethod
    def create(self, room: Room) -> Room: ...

    @abstractmethod
    def get_by_id(self, room_id: int) -> Room | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Room | None: ...

    @abstractmethod
    def get_by_number(self, room_number: str) -> Room | None: ...

    @abstractmethod
    def list_all(self, status: RoomStatus | None = None) -> list[Room]: ...

    @abstractmethod
    def update(self, room: Room) -> Room: ...

    @abstractmethod
    def update_status(self, room_id: int, status: RoomStatus) -> None: ...

    @abstractmethod
    def update_meter_reading(self, room_id: int, reading: int) -> None: ...

    @abstractmethod
    def list_occupancy(self) -> list[RoomOccupancy]: ...


class TenantRepository(ABC):
    @abstractmethod
    def create(self, tenant: Tenant) -> Tenant: ...

    @abstractmethod
    def get_by_id(self, tenant_id: int) -> Tenant | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Tenant | None: ...

    @abstractmethod
    def list_active(self) -> list[Tenant]: ...

    @abstractmethod
    def update(self, tenant: Tenant) -> Tenant: ...

    @abstractmethod
    def update_room(self, tenant_id: int, room_id: int | None, room_number: str) -> None: ...

    @abstractmethod
    def delete(self, tenant_id: int) -> None: ...


class OccupancyRepository(ABC):
    @abstractmethod
    def create(self, occupancy: Occupancy) -> Occupancy: ...

    @abstractmethod
    def get_current_for_tenant(self, tenant_id: int) -> Occupancy | None: ...

    @abstractmethod
    def list_current_for_room(self, room_id: int) -> list[Occupancy]: ...

    @abstractmethod
    def count_current_for_room(self, room_id: int) -> int: ...

    @abstractmethod
    def close(self, occupancy_id: int, check_out_date: date) -> None: ...


class BillingRepository(ABC):
    @abstractmethod
    def create(self, billing: Billing) -> Billing: ...

    @abstractmethod
    def get_by_id(self, billing_id: int) -> Billing | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Billing | None: ...

    @abstractmethod
    def exists_for_month(self, room_id: int, billing_month: date) -> bool: ...

    @abstractmethod
    def list_all(self, billing_month: date | None = None) -> list[Billing]: ...

    @abstractmethod
    def update_charges(self, billing: Billing) -> Billing: ...

    @abstractmethod
    def mark_paid(self, billing_id: int, paid_date: datetime) -> None: ...


class SettingsRepository(ABC):
    @abstractmethod
    def get(self) -> SystemSettings | None: ...

    @abstractmethod
    def save(self, system_settings: SystemSettings) -> SystemSettings: ...


class StaffRepository(ABC):
    @abstractmethod
    def create(self, staff: Staff) -> Staff: ...

    @abstractmethod
    def get_by_id(self, staff_id: int) -> Staff | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Staff | None: ...

    @abstractmethod
    def list_all(self, include_inactive: bool = False) -> list[Staff]: ...

    @abstractmethod
    def update(self, staff: Staff) -> Staff: ...

    @abstractmethod
    def set_active(self, staff_id: int, is_active: bool) -> None: ...


class AnnouncementRepository(ABC):
    @abstractmethod
    def create(self, announcement: Announcement) -> Announcement: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Announcement | None: ...

    @abstractmethod
    def list_since(self, since: date) -> list[Announcement]: ...

    @abstractmethod
    def delete(self, announcement_id: int) -> None: ...


class UserRepository(ABC):
    @abstractmethod
    def create(self, user: User) -> User: ...

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def list_all(self) -> list[User]: ...

    @abstractmethod
    def update_password_hash(self, username: str, password_hash: str) -> None: ...

    @abstractmethod
    def unlink_tenant(self, tenant_id: int) -> None: ...


class AuditLogRepository(ABC):
    @abstractmethod
    def create(self, audit_log: AuditLog) -> AuditLog: ...

    @abstractmethod
    def list_by_entity(self, entity_type: str, entity_id: int) -> list[AuditLog]: ...

    @abstractmethod
    def list_by_actor(self, actor_id: int, limit: int = 50) -> list[AuditLog]: ...

    @abstractmethod
    def list_recent(self, limit: int = 50) -> list[AuditLog]: ...
