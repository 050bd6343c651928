from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class AuditEventType:
    """String constants for all audit event types."""

    # User events
    USER_LOGIN = "user.login"
    USER_LOGIN_FAILED = "user.login_failed"
    USER_CREATE = "user.create"
    USER_CHANGE_PASSWORD = "user.change_password"
    USER_LOGOUT = "user.logout"

    # Room events
    ROOM_CREATE = "room.create"
    ROOM_UPDATE = "room.update"
    ROOM_CHANGE_STATUS = "room.change_status"

    # Tenant events
    TENANT_ONBOARD = "tenant.onboard"
    TENANT_UPDATE = "tenant.update"
    TENANT_CHECK_OUT = "tenant.check_out"
    TENANT_ASSIGN_ROOM = "tenant.assign_room"

    # Staff events
    STAFF_CREATE = "staff.create"
    STAFF_UPDATE = "staff.update"
    STAFF_DEACTIVATE = "staff.deactivate"

    # Billing events
    BILLING_CREATE = "billing.create"
    BILLING_UPDATE = "billing.update"
    BILLING_MARK_PAID = "billing.mark_paid"

    # Settings and announcements
    SETTINGS_UPDATE = "settings.update"
    ANNOUNCEMENT_CREATE = "announcement.create"
    ANNOUNCEMENT_DELETE = "announcement.delete"


class AuditLog(BaseModel):
    id: int | None = None
    uuid: str = ""
    event_type: str
    actor_id: int | None = None
    actor_username: str = ""
    source: str = ""  # 'web' or 'cli'
    entity_type: str = ""
    entity_id: int | None = None
    entity_uuid: str = ""
    previous_state: dict | None = None  # JSON (None for creates)
    new_state: dict | None = None  # JSON (None for deletes)
    metadata: dict = {}
    created_at: datetime | None = None
