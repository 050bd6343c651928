from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from dormkeep.models.audit_log import AuditEventType
from dormkeep.services.audit_serializers import serialize_announcement
from dormkeep.services.audit_service import SOURCE_WEB
from dormkeep.services.authorization_service import AuthorizationService
from web.deps import current_user, get_announcement_service, get_audit_service, require
from web.schemas import AnnouncementCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/announcements")


@router.get("/")
async def announcement_list(request: Request):
    # Every logged-in role, tenants included, can read announcements.
    current_user(request)
    return [a.model_dump(mode="json") for a in get_announcement_service(request).list_recent()]


@router.post("/", status_code=201)
async def announcement_create(request: Request, body: AnnouncementCreate):
    user = require(request, AuthorizationService.can_manage_announcements)
    announcement = get_announcement_service(request).create_announcement(
        body.title,
        content=body.content,
        important=body.important,
        publish_date=body.publish_date,
        created_by=user.id,
    )
    get_audit_service(request).safe_record(
        AuditEventType.ANNOUNCEMENT_CREATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="announcement",
        entity_id=announcement.id,
        entity_uuid=announcement.uuid,
        new_state=serialize_announcement(announcement),
    )
    return announcement.model_dump(mode="json")


@router.delete("/{announcement_uuid}")
async def announcement_delete(request: Request, announcement_uuid: str):
    user = require(request, AuthorizationService.can_manage_announcements)
    service = get_announcement_service(request)
    announcement = service.get_announcement_by_uuid(announcement_uuid)
    if announcement is None:
        raise HTTPException(status_code=404, detail="Announcement not found")
    service.delete_announcement(announcement)
    get_audit_service(request).safe_record(
        AuditEventType.ANNOUNCEMENT_DELETE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="announcement",
        entity_id=announcement.id,
        entity_uuid=announcement.uuid,
        previous_state=serialize_announcement(announcement),
    )
    return {"detail": "Announcement deleted"}
