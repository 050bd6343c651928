from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from dormkeep.models.audit_log import AuditEventType
from dormkeep.services.audit_serializers import serialize_user
from dormkeep.services.audit_service import SOURCE_WEB
from dormkeep.services.authorization_service import AuthorizationService
from web.deps import get_audit_service, get_user_service, require
from web.schemas import UserCreate, user_out

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


@router.get("/")
async def user_list(request: Request):
    require(request, AuthorizationService.can_manage_users)
    return [user_out(u) for u in get_user_service(request).list_users()]


@router.post("/", status_code=201)
async def user_create(request: Request, body: UserCreate):
    actor = require(request, AuthorizationService.can_manage_users)
    user = get_user_service(request).create_user(
        body.username,
        body.password,
        role=body.role,
        email=body.email,
        tenant_id=body.tenant_id,
        staff_id=body.staff_id,
    )
    get_audit_service(request).safe_record(
        AuditEventType.USER_CREATE,
        actor=actor,
        source=SOURCE_WEB,
        entity_type="user",
        entity_id=user.id,
        new_state=serialize_user(user),
    )
    return user_out(user)
