from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.system_settings import SystemSettings
from dormkeep.services.audit_serializers import serialize_settings
from dormkeep.services.audit_service import SOURCE_WEB
from dormkeep.services.authorization_service import AuthorizationService
from web.deps import get_audit_service, get_settings_service, require
from web.schemas import SettingsUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings")


@router.get("/")
async def settings_detail(request: Request):
    require(request, AuthorizationService.can_manage_settings)
    return get_settings_service(request).get_settings().model_dump(mode="json")


@router.put("/")
async def settings_save(request: Request, body: SettingsUpdate):
    user = require(request, AuthorizationService.can_manage_settings)
    service = get_settings_service(request)
    previous = service.get_settings()
    saved = service.save_settings(SystemSettings(**body.model_dump()), updated_by=user.id)
    get_audit_service(request).safe_record(
        AuditEventType.SETTINGS_UPDATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="system_settings",
        entity_id=1,
        previous_state=serialize_settings(previous),
        new_state=serialize_settings(saved),
    )
    return saved.model_dump(mode="json")
