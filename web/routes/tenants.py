from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.room import Room
from dormkeep.models.tenant import Tenant
from dormkeep.services.audit_serializers import serialize_tenant
from dormkeep.services.audit_service import SOURCE_WEB
from dormkeep.services.authorization_service import AuthorizationService
from dormkeep.services.tenant_service import TenantService
from web.deps import get_audit_service, get_room_service, get_tenant_service, require
from web.schemas import TenantCreate, TenantMove, TenantUpdate, tenant_out

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants")


def _get_tenant_or_404(service: TenantService, tenant_uuid: str) -> Tenant:
    tenant = service.get_tenant_by_uuid(tenant_uuid)
    if tenant is None:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return tenant


def _get_room_or_404(request: Request, room_uuid: str) -> Room:
    room = get_room_service(request).get_room_by_uuid(room_uuid)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.get("/")
async def tenant_list(request: Request):
    require(request, AuthorizationService.can_manage_tenants)
    return [tenant_out(t) for t in get_tenant_service(request).list_tenants()]


@router.post("/", status_code=201)
async def tenant_onboard(request: Request, body: TenantCreate):
    user = require(request, AuthorizationService.can_manage_tenants)
    room = _get_room_or_404(request, body.room_uuid)
    tenant = get_tenant_service(request).onboard_tenant(Tenant(**body.model_dump(exclude={"room_uuid"})), room)
    get_audit_service(request).safe_record(
        AuditEventType.TENANT_ONBOARD,
        actor=user,
        source=SOURCE_WEB,
        entity_type="tenant",
        entity_id=tenant.id,
        entity_uuid=tenant.uuid,
        new_state=serialize_tenant(tenant),
        metadata={"room_number": room.room_number},
    )
    return tenant_out(tenant)


@router.get("/{tenant_uuid}")
async def tenant_detail(request: Request, tenant_uuid: str):
    require(request, AuthorizationService.can_manage_tenants)
    return tenant_out(_get_tenant_or_404(get_tenant_service(request), tenant_uuid))


@router.patch("/{tenant_uuid}")
async def tenant_update(request: Request, tenant_uuid: str, body: TenantUpdate):
    user = require(request, AuthorizationService.can_manage_tenants)
    service = get_tenant_service(request)
    tenant = _get_tenant_or_404(service, tenant_uuid)
    previous_state = serialize_tenant(tenant)
    updated = service.update_tenant(tenant.model_copy(update=body.model_dump(exclude_none=True)))
    get_audit_service(request).safe_record(
        AuditEventType.TENANT_UPDATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="tenant",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_tenant(updated),
    )
    return tenant_out(updated)


@router.post("/{tenant_uuid}/move")
async def tenant_move(request: Request, tenant_uuid: str, body: TenantMove):
    user = require(request, AuthorizationService.can_manage_tenants)
    service = get_tenant_service(request)
    tenant = _get_tenant_or_404(service, tenant_uuid)
    room = _get_room_or_404(request, body.room_uuid)
    previous_state = serialize_tenant(tenant)
    moved = service.assign_room(tenant, room)
    get_audit_service(request).safe_record(
        AuditEventType.TENANT_ASSIGN_ROOM,
        actor=user,
        source=SOURCE_WEB,
        entity_type="tenant",
        entity_id=moved.id,
        entity_uuid=moved.uuid,
        previous_state=previous_state,
        new_state=serialize_tenant(moved),
    )
    return tenant_out(moved)


@router.post("/{tenant_uuid}/check-out")
async def tenant_check_out(request: Request, tenant_uuid: str):
    user = require(request, AuthorizationService.can_manage_tenants)
    service = get_tenant_service(request)
    tenant = _get_tenant_or_404(service, tenant_uuid)
    service.check_out(tenant)
    get_audit_service(request).safe_record(
        AuditEventType.TENANT_CHECK_OUT,
        actor=user,
        source=SOURCE_WEB,
        entity_type="tenant",
        entity_id=tenant.id,
        entity_uuid=tenant.uuid,
        previous_state=serialize_tenant(tenant),
    )
    return {"detail": f"{tenant.full_name} checked out"}
