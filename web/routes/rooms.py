from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.room import Room, RoomStatus
from dormkeep.services.audit_serializers import serialize_room
from dormkeep.services.audit_service import SOURCE_WEB
from dormkeep.services.authorization_service import AuthorizationService
from dormkeep.services.room_service import RoomService
from web.deps import get_audit_service, get_room_service, require
from web.schemas import RoomCreate, RoomStatusUpdate, RoomUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms")


def _room_out(room: Room, service: RoomService) -> dict:
    data = room.model_dump(mode="json")
    data["occupant_count"] = service.occupant_count(room.id) if room.id is not None else 0
    return data


def _get_room_or_404(service: RoomService, room_uuid: str) -> Room:
    room = service.get_room_by_uuid(room_uuid)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.get("/")
async def room_list(request: Request, status: RoomStatus | None = None):
    require(request, AuthorizationService.can_manage_rooms)
    service = get_room_service(request)
    return [_room_out(r, service) for r in service.list_rooms(status)]


@router.post("/", status_code=201)
async def room_create(request: Request, body: RoomCreate):
    user = require(request, AuthorizationService.can_manage_rooms)
    service = get_room_service(request)
    room = service.create_room(body.room_number, room_type=body.room_type, floor=body.floor, capacity=body.capacity)
    get_audit_service(request).safe_record(
        AuditEventType.ROOM_CREATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="room",
        entity_id=room.id,
        entity_uuid=room.uuid,
        new_state=serialize_room(room),
    )
    return _room_out(room, service)


@router.get("/{room_uuid}")
async def room_detail(request: Request, room_uuid: str):
    require(request, AuthorizationService.can_manage_rooms)
    service = get_room_service(request)
    return _room_out(_get_room_or_404(service, room_uuid), service)


@router.patch("/{room_uuid}")
async def room_update(request: Request, room_uuid: str, body: RoomUpdate):
    user = require(request, AuthorizationService.can_manage_rooms)
    service = get_room_service(request)
    room = _get_room_or_404(service, room_uuid)
    previous_state = serialize_room(room)
    updated = service.update_room(room.model_copy(update=body.model_dump(exclude_none=True)))
    get_audit_service(request).safe_record(
        AuditEventType.ROOM_UPDATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="room",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_room(updated),
    )
    return _room_out(updated, service)


@router.post("/{room_uuid}/status")
async def room_change_status(request: Request, room_uuid: str, body: RoomStatusUpdate):
    user = require(request, AuthorizationService.can_manage_rooms)
    service = get_room_service(request)
    room = _get_room_or_404(service, room_uuid)
    previous_state = serialize_room(room)
    updated = service.change_status(room, body.status)
    get_audit_service(request).safe_record(
        AuditEventType.ROOM_CHANGE_STATUS,
        actor=user,
        source=SOURCE_WEB,
        entity_type="room",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_room(updated),
    )
    return _room_out(updated, service)
