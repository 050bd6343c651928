from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    TENANT = "tenant"


class User(BaseModel):
    id: int | None = None
    username: str
    email: str = ""
    password_hash: str = ""
    role: UserRole = UserRole.TENANT
    tenant_id: int | None = None
    staff_id: int | None = None
    created_at: datetime | None = None
