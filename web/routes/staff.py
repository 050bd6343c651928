from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.staff import Staff
from dormkeep.services.audit_serializers import serialize_staff
from dormkeep.services.audit_service import SOURCE_WEB
from dormkeep.services.authorization_service import AuthorizationService
from dormkeep.services.staff_service import StaffService
from web.deps import get_audit_service, get_staff_service, require
from web.schemas import StaffCreate, StaffUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff")


def _get_staff_or_404(service: StaffService, staff_uuid: str) -> Staff:
    staff = service.get_staff_by_uuid(staff_uuid)
    if staff is None:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return staff


@router.get("/")
async def staff_list(request: Request, include_inactive: bool = False):
    require(request, AuthorizationService.can_manage_staff)
    return [s.model_dump(mode="json") for s in get_staff_service(request).list_staff(include_inactive)]


@router.post("/", status_code=201)
async def staff_create(request: Request, body: StaffCreate):
    user = require(request, AuthorizationService.can_manage_staff)
    staff = get_staff_service(request).create_staff(Staff(**body.model_dump()))
    get_audit_service(request).safe_record(
        AuditEventType.STAFF_CREATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="staff",
        entity_id=staff.id,
        entity_uuid=staff.uuid,
        new_state=serialize_staff(staff),
    )
    return staff.model_dump(mode="json")


@router.patch("/{staff_uuid}")
async def staff_update(request: Request, staff_uuid: str, body: StaffUpdate):
    user = require(request, AuthorizationService.can_manage_staff)
    service = get_staff_service(request)
    staff = _get_staff_or_404(service, staff_uuid)
    previous_state = serialize_staff(staff)
    updated = service.update_staff(staff.model_copy(update=body.model_dump(exclude_none=True)))
    get_audit_service(request).safe_record(
        AuditEventType.STAFF_UPDATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="staff",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_staff(updated),
    )
    return updated.model_dump(mode="json")


@router.post("/{staff_uuid}/deactivate")
async def staff_deactivate(request: Request, staff_uuid: str):
    user = require(request, AuthorizationService.can_manage_staff)
    service = get_staff_service(request)
    staff = _get_staff_or_404(service, staff_uuid)
    service.deactivate(staff)
    get_audit_service(request).safe_record(
        AuditEventType.STAFF_DEACTIVATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="staff",
        entity_id=staff.id,
        entity_uuid=staff.uuid,
        previous_state=serialize_staff(staff),
    )
    return {"detail": f"{staff.full_name} deactivated"}
