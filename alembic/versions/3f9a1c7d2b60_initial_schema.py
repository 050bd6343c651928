"""initial schema

Revision ID: 3f9a1c7d2b60
Revises:
Create Date: 2026-10-12
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3f9a1c7d2b60"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("room_number", sa.String(20), nullable=False, unique=True),
        sa.Column("room_type", sa.String(50), nullable=False, server_default=""),
        sa.Column("floor", sa.Integer, nullable=False, server_default="1"),
        sa.Column("capacity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("latest_meter_reading", sa.Integer, nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="vacant"),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(30), nullable=False, server_default=""),
        sa.Column("address", sa.Text, nullable=False, server_default=""),
        sa.Column("emergency_contact", sa.String(255), nullable=False, server_default=""),
        sa.Column("residents", sa.Text, nullable=False, server_default=""),
        sa.Column("room_id", sa.Integer, sa.ForeignKey("rooms.id"), nullable=True),
        sa.Column("room_number", sa.String(20), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "occupancy",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("tenant_id", sa.Integer, sa.ForeignKey("tenants.id"), nullable=False),
        sa.Column("room_id", sa.Integer, sa.ForeignKey("rooms.id"), nullable=False),
        sa.Column("check_in_date", sa.Date, nullable=False),
        sa.Column("check_out_date", sa.Date, nullable=True),
        sa.Column("is_current", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_occupancy_room_current", "occupancy", ["room_id", "is_current"])
    op.create_index("ix_occupancy_tenant_current", "occupancy", ["tenant_id", "is_current"])

    op.create_table(
        "billings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("room_id", sa.Integer, sa.ForeignKey("rooms.id"), nullable=False),
        sa.Column("tenant_id", sa.Integer, sa.ForeignKey("tenants.id"), nullable=True),
        sa.Column("billing_month", sa.Date, nullable=False),
        sa.Column("room_rent", sa.Integer, nullable=False, server_default="0"),
        sa.Column("water_units", sa.Integer, nullable=False, server_default="0"),
        sa.Column("water_cost", sa.Integer, nullable=False, server_default="0"),
        sa.Column("electricity_units", sa.Integer, nullable=False, server_default="0"),
        sa.Column("electricity_cost", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("previous_meter_reading", sa.Integer, nullable=False, server_default="0"),
        sa.Column("current_meter_reading", sa.Integer, nullable=False, server_default="0"),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column("paid_date", sa.DateTime, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("receipt_number", sa.String(50), nullable=False, server_default=""),
        sa.Column("edited_by", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("room_id", "billing_month", name="uq_billings_room_month"),
    )
    op.create_index("ix_billings_billing_month", "billings", ["billing_month"])

    op.create_table(
        "system_settings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("water_rate", sa.Integer, nullable=False, server_default="0"),
        sa.Column("electricity_rate", sa.Integer, nullable=False, server_default="0"),
        sa.Column("room_rent", sa.Integer, nullable=False, server_default="0"),
        sa.Column("late_fee", sa.Integer, nullable=False, server_default="0"),
        sa.Column("floor_count", sa.Integer, nullable=False, server_default="1"),
        sa.Column("updated_by", sa.Integer, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "staffs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(30), nullable=False, server_default=""),
        sa.Column("position", sa.String(100), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "announcements",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
        sa.Column("publish_date", sa.Date, nullable=False),
        sa.Column("important", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="tenant"),
        sa.Column("tenant_id", sa.Integer, sa.ForeignKey("tenants.id"), nullable=True),
        sa.Column("staff_id", sa.Integer, sa.ForeignKey("staffs.id"), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("users")
    op.drop_table("announcements")
    op.drop_table("staffs")
    op.drop_table("system_settings")
    op.drop_index("ix_billings_billing_month", table_name="billings")
    op.drop_table("billings")
    op.drop_index("ix_occupancy_tenant_current", table_name="occupancy")
    op.drop_index("ix_occupancy_room_current", table_name="occupancy")
    op.drop_table("occupancy")
    op.drop_table("tenants")
    op.drop_table("rooms")
