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


def get_room_repository() -> RoomRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemyRoomRepository

    return SQLAlchemyRoomRepository(get_connection())


def get_tenant_repository() -> TenantRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemyTenantRepository

    return SQLAlchemyTenantRepository(get_connection())


def get_occupancy_repository() -> OccupancyRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemyOccupancyRepository

    return SQLAlchemyOccupancyRepository(get_connection())


def get_billing_repository() -> BillingRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemyBillingRepository

    return SQLAlchemyBillingRepository(get_connection())


def get_settings_repository() -> SettingsRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemySettingsRepository

    return SQLAlchemySettingsRepository(get_connection())


def get_staff_repository() -> StaffRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemyStaffRepository

    return SQLAlchemyStaffRepository(get_connection())


def get_announcement_repository() -> AnnouncementRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemyAnnouncementRepository

    return SQLAlchemyAnnouncementRepository(get_connection())


def get_user_repository() -> UserRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemyUserRepository

    return SQLAlchemyUserRepository(get_connection())


def get_audit_log_repository() -> AuditLogRepository:
    from dormkeep.db import get_connection
    from dormkeep.repositories.sqlalchemy import SQLAlchemyAuditLogRepository

    return SQLAlchemyAuditLogRepository(get_connection())
