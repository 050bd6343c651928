import pytest
from sqlalchemy import Connection

from dormkeep.repositories.sqlalchemy import (
    SQLAlchemyAnnouncementRepository,
    SQLAlchemyAuditLogRepository,
    SQLAlchemyBillingRepository,
    SQLAlchemyOccupancyRepository,
    SQLAlchemyRoomRepository,
    SQLAlchemySettingsRepository,
    SQLAlchemyStaffRepository,
    SQLAlchemyTenantRepository,
    SQLAlchemyUserRepository,
)


@pytest.fixture()
def room_repo(db_connection: Connection) -> SQLAlchemyRoomRepository:
    return SQLAlchemyRoomRepository(db_connection)


@pytest.fixture()
def tenant_repo(db_connection: Connection) -> SQLAlchemyTenantRepository:
    return SQLAlchemyTenantRepository(db_connection)


@pytest.fixture()
def occupancy_repo(db_connection: Connection) -> SQLAlchemyOccupancyRepository:
    return SQLAlchemyOccupancyRepository(db_connection)


@pytest.fixture()
def billing_repo(db_connection: Connection) -> SQLAlchemyBillingRepository:
    return SQLAlchemyBillingRepository(db_connection)


@pytest.fixture()
def settings_repo(db_connection: Connection) -> SQLAlchemySettingsRepository:
    return SQLAlchemySettingsRepository(db_connection)


@pytest.fixture()
def staff_repo(db_connection: Connection) -> SQLAlchemyStaffRepository:
    return SQLAlchemyStaffRepository(db_connection)


@pytest.fixture()
def announcement_repo(db_connection: Connection) -> SQLAlchemyAnnouncementRepository:
    return SQLAlchemyAnnouncementRepository(db_connection)


@pytest.fixture()
def user_repo(db_connection: Connection) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(db_connection)


@pytest.fixture()
def audit_log_repo(db_connection: Connection) -> SQLAlchemyAuditLogRepository:
    return SQLAlchemyAuditLogRepository(db_connection)
