"""Web test fixtures: TestClient over a shared in-memory SQLite engine."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from dormkeep.models.room import Room
from dormkeep.models.system_settings import SystemSettings
from dormkeep.models.tenant import Occupancy, Tenant
from dormkeep.models.user import UserRole
from dormkeep.repositories.sqlalchemy import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyOccupancyRepository,
    SQLAlchemyRoomRepository,
    SQLAlchemySettingsRepository,
    SQLAlchemyTenantRepository,
    SQLAlchemyUserRepository,
)
from dormkeep.services.user_service import UserService
from tests.conftest import SCHEMA_DDL

PASSWORD = "testpass"


def _make_test_engine():
    """Fresh in-memory SQLite engine; StaticPool keeps one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    with engine.connect() as conn:
        for statement in SCHEMA_DDL.strip().split(";"):
            stmt = statement.strip()
            if stmt:
                conn.execute(text(stmt))
        conn.commit()

    return engine


def create_user_in_db(engine, username: str, role: UserRole):
    with engine.connect() as conn:
        return UserService(SQLAlchemyUserRepository(conn)).create_user(username, PASSWORD, role=role)


def seed_billable_rooms(engine) -> dict[str, Room]:
    """Rooms 101 (two occupants) and 102 (one occupant), both at meter 100, with 20/7/3000 baht rates."""
    with engine.connect() as conn:
        room_repo = SQLAlchemyRoomRepository(conn)
        tenant_repo = SQLAlchemyTenantRepository(conn)
        occupancy_repo = SQLAlchemyOccupancyRepository(conn)
        SQLAlchemySettingsRepository(conn).save(
            SystemSettings(water_rate=2000, electricity_rate=700, room_rent=300000)
        )

        rooms = {}
        for number, occupants in (("101", 2), ("102", 1)):
            room = room_repo.create(Room(room_number=number, capacity=2, latest_meter_reading=100))
            for i in range(occupants):
                tenant = tenant_repo.create(
                    Tenant(first_name=f"Tenant{number}{i}", room_id=room.id, room_number=number)
                )
                occupancy_repo.create(
                    Occupancy(tenant_id=tenant.id, room_id=room.id, check_in_date=date(2025, 1, 1))
                )
            rooms[number] = room
        return rooms


def get_audit_logs(engine, event_type=None):
    """Query audit_logs from the test DB. Optionally filter by event_type."""
    with engine.connect() as conn:
        logs = SQLAlchemyAuditLogRepository(conn).list_recent(limit=100)
        if event_type:
            logs = [log for log in logs if log.event_type == event_type]
        return logs


@pytest.fixture(autouse=True)
def web_test_db(monkeypatch):
    """Set up in-memory DB and patch the web app to use it."""
    engine = _make_test_engine()

    import web.deps as deps_module

    monkeypatch.setattr(deps_module, "get_engine", lambda: engine)

    import web.app as app_module

    monkeypatch.setattr(app_module, "initialize_db", lambda: None)

    import web.auth as auth_module

    auth_module._login_attempts.clear()

    yield engine

    engine.dispose()


@pytest.fixture()
def test_engine(web_test_db):
    return web_test_db


def _new_client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app)


@pytest.fixture()
def client():
    return _new_client()


def _logged_in(engine, username: str, role: UserRole):
    create_user_in_db(engine, username, role)
    c = _new_client()
    response = c.post("/login", json={"username": username, "password": PASSWORD})
    assert response.status_code == 200
    return c


@pytest.fixture()
def admin_client(test_engine):
    return _logged_in(test_engine, "admin", UserRole.ADMIN)


@pytest.fixture()
def staff_client(test_engine):
    return _logged_in(test_engine, "staff", UserRole.STAFF)


@pytest.fixture()
def tenant_client(test_engine):
    return _logged_in(test_engine, "tenant", UserRole.TENANT)


@pytest.fixture()
def billable_rooms(test_engine):
    return seed_billable_rooms(test_engine)
