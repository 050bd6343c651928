"""Root conftest: in-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from dormkeep.models.billing import Billing
from dormkeep.models.room import Room, RoomOccupancy
from dormkeep.models.tenant import Tenant

# Matches Alembic head: 8c41e2b7a9d3 (create audit_logs)
SCHEMA_DDL = """
CREATE TABLE rooms (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    room_number VARCHAR(20) NOT NULL UNIQUE,
    room_type VARCHAR(50) NOT NULL DEFAULT '',
    floor INTEGER NOT NULL DEFAULT 1,
    capacity INTEGER NOT NULL DEFAULT 1,
    latest_meter_reading INTEGER NOT NULL DEFAULT 0,
    status VARCHAR(20) NOT NULL DEFAULT 'vacant',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE tenants (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    first_name VARCHAR(100) NOT NULL,
    last_name VARCHAR(100) NOT NULL DEFAULT '',
    email VARCHAR(255) NOT NULL DEFAULT '',
    phone VARCHAR(30) NOT NULL DEFAULT '',
    address TEXT NOT NULL DEFAULT '',
    emergency_contact VARCHAR(255) NOT NULL DEFAULT '',
    residents TEXT NOT NULL DEFAULT '',
    room_id INTEGER REFERENCES rooms(id),
    room_number VARCHAR(20) NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE occupancy (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    tenant_id INTEGER NOT NULL REFERENCES tenants(id),
    room_id INTEGER NOT NULL REFERENCES rooms(id),
    check_in_date DATE NOT NULL,
    check_out_date DATE,
    is_current BOOLEAN NOT NULL DEFAULT 1,
    created_at DATETIME NOT NULL
);

CREATE TABLE billings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    room_id INTEGER NOT NULL REFERENCES rooms(id),
    tenant_id INTEGER REFERENCES tenants(id),
    billing_month DATE NOT NULL,
    room_rent INTEGER NOT NULL DEFAULT 0,
    water_units INTEGER NOT NULL DEFAULT 0,
    water_cost INTEGER NOT NULL DEFAULT 0,
    electricity_units INTEGER NOT NULL DEFAULT 0,
    electricity_cost INTEGER NOT NULL DEFAULT 0,
    total_amount INTEGER NOT NULL DEFAULT 0,
    previous_meter_reading INTEGER NOT NULL DEFAULT 0,
    current_meter_reading INTEGER NOT NULL DEFAULT 0,
    due_date DATE,
    paid_date DATETIME,
    status VARCHAR(20) NOT NULL DEFAULT 'pending',
    receipt_number VARCHAR(50) NOT NULL DEFAULT '',
    edited_by INTEGER,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    CONSTRAINT uq_billings_room_month UNIQUE (room_id, billing_month)
);

CREATE TABLE system_settings (
    id INTEGER PRIMARY KEY,
    water_rate INTEGER NOT NULL DEFAULT 0,
    electricity_rate INTEGER NOT NULL DEFAULT 0,
    room_rent INTEGER NOT NULL DEFAULT 0,
    late_fee INTEGER NOT NULL DEFAULT 0,
    floor_count INTEGER NOT NULL DEFAULT 1,
    updated_by INTEGER,
    updated_at DATETIME
);

CREATE TABLE staffs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    first_name VARCHAR(100) NOT NULL,
    last_name VARCHAR(100) NOT NULL DEFAULT '',
    email VARCHAR(255) NOT NULL DEFAULT '',
    phone VARCHAR(30) NOT NULL DEFAULT '',
    position VARCHAR(100) NOT NULL DEFAULT '',
    is_active BOOLEAN NOT NULL DEFAULT 1,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE TABLE announcements (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    title VARCHAR(255) NOT NULL,
    content TEXT NOT NULL DEFAULT '',
    publish_date DATE NOT NULL,
    important BOOLEAN NOT NULL DEFAULT 0,
    created_by INTEGER,
    created_at DATETIME NOT NULL
);

CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username VARCHAR(255) NOT NULL UNIQUE,
    email VARCHAR(255) NOT NULL DEFAULT '',
    password_hash TEXT NOT NULL,
    role VARCHAR(20) NOT NULL DEFAULT 'tenant',
    tenant_id INTEGER REFERENCES tenants(id),
    staff_id INTEGER REFERENCES staffs(id),
    created_at DATETIME NOT NULL
);

CREATE TABLE audit_logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    event_type VARCHAR(50) NOT NULL,
    actor_id INTEGER,
    actor_username VARCHAR(255) NOT NULL DEFAULT '',
    source VARCHAR(10) NOT NULL,
    entity_type VARCHAR(50) NOT NULL DEFAULT '',
    entity_id INTEGER,
    entity_uuid VARCHAR(26) NOT NULL DEFAULT '',
    previous_state TEXT,
    new_state TEXT,
    metadata TEXT NOT NULL DEFAULT '{}',
    created_at DATETIME NOT NULL
);
"""


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _sample_room(**overrides) -> Room:
    defaults = dict(room_number="101", room_type="standard", floor=1, capacity=2)
    defaults.update(overrides)
    return Room(**defaults)


def _sample_tenant(**overrides) -> Tenant:
    defaults = dict(first_name="Somchai", last_name="Jaidee", phone="0812345678", email="somchai@example.com")
    defaults.update(overrides)
    return Tenant(**defaults)


def _sample_billing(room_id: int = 1, **overrides) -> Billing:
    # The worked example: 2 occupants, meter 100 -> 150, rates 20 / 7 / 3000 baht
    defaults = dict(
        room_id=room_id,
        room_number="101",
        billing_month=date(2025, 3, 1),
        room_rent=300000,
        water_units=2,
        water_cost=4000,
        electricity_units=50,
        electricity_cost=35000,
        total_amount=339000,
        previous_meter_reading=100,
        current_meter_reading=150,
        due_date=date(2025, 4, 5),
        receipt_number="INV-202503-101",
    )
    defaults.update(overrides)
    return Billing(**defaults)


def _sample_snapshot(**overrides) -> RoomOccupancy:
    defaults = dict(room_id=1, room_number="101", occupant_count=2, latest_meter_reading=100, tenant_ids=[1, 2])
    defaults.update(overrides)
    return RoomOccupancy(**defaults)


@pytest.fixture()
def sample_room():
    return _sample_room


@pytest.fixture()
def sample_tenant():
    return _sample_tenant


@pytest.fixture()
def sample_billing():
    return _sample_billing


@pytest.fixture()
def sample_snapshot():
    return _sample_snapshot
