from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Staff(BaseModel):
    id: int | None = None
    uuid: str = ""
    first_name: str
    last_name: str = ""
    email: str = ""
    phone: str = ""
    position: str = ""
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
