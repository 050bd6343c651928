from __future__ import annotations

import logging
from datetime import date, datetime

from fastapi import APIRouter, HTTPException, Request

from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.billing import Billing, BillingStatus
from dormkeep.models.room import RoomOccupancy
from dormkeep.services.audit_serializers import serialize_billing
from dormkeep.services.audit_service import SOURCE_WEB
from dormkeep.services.authorization_service import AuthorizationService
from dormkeep.services.billing_service import BillingService
from web.deps import get_audit_service, get_billing_service, get_room_service, get_settings_service, require
from web.schemas import BillingEdit, BillingRunRequest, billing_out, run_result_out

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/billings")


def _parse_month(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise HTTPException(status_code=422, detail="month must use the YYYY-MM format") from None


def _get_billing_or_404(service: BillingService, billing_uuid: str) -> Billing:
    billing = service.get_billing_by_uuid(billing_uuid)
    if billing is None:
        raise HTTPException(status_code=404, detail="Billing not found")
    return billing


def _readings_by_room_id(snapshots: list[RoomOccupancy], readings: dict[str, int]) -> dict[int, int]:
    by_number = {s.room_number: s.room_id for s in snapshots}
    unknown = sorted(set(readings) - set(by_number))
    if unknown:
        raise HTTPException(status_code=422, detail=f"No occupied room with number: {', '.join(unknown)}")
    return {by_number[number]: value for number, value in readings.items()}


@router.get("/")
async def billing_list(request: Request, month: str = "", status: BillingStatus | None = None, search: str = ""):
    require(request, AuthorizationService.can_view_billings)
    billings = get_billing_service(request).list_billings(
        month=_parse_month(month) if month else None,
        status=status,
        search=search,
    )
    return [billing_out(b) for b in billings]


@router.post("/preview")
async def billing_preview(request: Request, body: BillingRunRequest):
    require(request, AuthorizationService.can_create_billing)
    snapshots = get_room_service(request).occupancy_snapshot()
    readings = _readings_by_room_id(snapshots, body.readings)
    rates = get_settings_service(request).get_rates()
    charges = get_billing_service(request).preview(snapshots, readings, rates)
    return [c.model_dump(mode="json") for c in charges]


@router.post("/run")
async def billing_run(request: Request, body: BillingRunRequest):
    user = require(request, AuthorizationService.can_create_billing)
    snapshots = get_room_service(request).occupancy_snapshot()
    readings = _readings_by_room_id(snapshots, body.readings)
    rates = get_settings_service(request).get_rates()

    result = get_billing_service(request).run_monthly_billing(
        snapshots, readings, rates, body.billing_month, due_date=body.due_date
    )

    audit = get_audit_service(request)
    for billing in result.created:
        audit.safe_record(
            AuditEventType.BILLING_CREATE,
            actor=user,
            source=SOURCE_WEB,
            entity_type="billing",
            entity_id=billing.id,
            entity_uuid=billing.uuid,
            new_state=serialize_billing(billing),
        )
    logger.info(
        "Billing run by %s for %s: %d created, %d failed",
        user.username,
        result.billing_month,
        len(result.created),
        len(result.errors),
    )
    return run_result_out(result)


@router.get("/{billing_uuid}")
async def billing_detail(request: Request, billing_uuid: str):
    require(request, AuthorizationService.can_view_billings)
    return billing_out(_get_billing_or_404(get_billing_service(request), billing_uuid))


@router.patch("/{billing_uuid}")
async def billing_edit(request: Request, billing_uuid: str, body: BillingEdit):
    user = require(request, AuthorizationService.can_edit_billing)
    service = get_billing_service(request)
    billing = _get_billing_or_404(service, billing_uuid)
    previous_state = serialize_billing(billing)
    updated = service.edit_billing(
        billing,
        body.current_meter_reading,
        get_settings_service(request).get_rates(),
        edited_by=user.id,
    )
    get_audit_service(request).safe_record(
        AuditEventType.BILLING_UPDATE,
        actor=user,
        source=SOURCE_WEB,
        entity_type="billing",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_billing(updated),
    )
    return billing_out(updated)


@router.post("/{billing_uuid}/pay")
async def billing_mark_paid(request: Request, billing_uuid: str):
    user = require(request, AuthorizationService.can_mark_paid)
    service = get_billing_service(request)
    billing = _get_billing_or_404(service, billing_uuid)
    previous_state = serialize_billing(billing)
    updated = service.mark_paid(billing)
    get_audit_service(request).safe_record(
        AuditEventType.BILLING_MARK_PAID,
        actor=user,
        source=SOURCE_WEB,
        entity_type="billing",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_billing(updated),
    )
    return billing_out(updated)
