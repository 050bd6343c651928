"""create audit_logs

Revision ID: 8c41e2b7a9d3
Revises: 3f9a1c7d2b60
Create Date: 2026-10-14
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "8c41e2b7a9d3"
down_revision: Union[str, Sequence[str], None] = "3f9a1c7d2b60"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("actor_id", sa.Integer, nullable=True),
        sa.Column("actor_username", sa.String(255), nullable=False, server_default=""),
        sa.Column("source", sa.String(10), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False, server_default=""),
        sa.Column("entity_id", sa.Integer, nullable=True),
        sa.Column("entity_uuid", sa.String(26), nullable=False, server_default=""),
        sa.Column("previous_state", sa.Text, nullable=True),
        sa.Column("new_state", sa.Text, nullable=True),
        sa.Column("metadata", sa.Text, nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])
    op.create_index("ix_audit_logs_actor_id", "audit_logs", ["actor_id"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_audit_logs_created_at", table_name="audit_logs")
    op.drop_index("ix_audit_logs_actor_id", table_name="audit_logs")
    op.drop_index("ix_audit_logs_entity", table_name="audit_logs")
    op.drop_table("audit_logs")
