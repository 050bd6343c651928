from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel


class Announcement(BaseModel):
    id: int | None = None
    uuid: str = ""
    title: str
    content: str = ""
    publish_date: date
    important: bool = False
    created_by: int | None = None
    created_at: datetime | None = None
