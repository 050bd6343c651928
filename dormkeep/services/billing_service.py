from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime

from dormkeep.constants import BKK_TZ
from dormkeep.errors import DuplicateBillingError, InvalidTransitionError, NotFoundError
from dormkeep.models.billing import (
    Billing,
    BillingRates,
    BillingRunResult,
    BillingStatus,
    RoomBillingOutcome,
    RoomCharges,
)
from dormkeep.models.room import RoomOccupancy
from dormkeep.repositories.base import BillingRepository, RoomRepository
from dormkeep.services.billing_calculator import (
    compute_charges,
    default_due_date,
    normalize_month,
    receipt_number,
    recompute_for_edit,
    resolve_readings,
    room_sort_key,
)
from dormkeep.settings import settings

logger = logging.getLogger(__name__)


class BillingService:
    def __init__(self, billing_repo: BillingRepository, room_repo: RoomRepository) -> None:
        self.billing_repo = billing_repo
        self.room_repo = room_repo

    def preview(
        self,
        snapshots: list[RoomOccupancy],
        readings: Mapping[int, int],
        rates: BillingRates,
    ) -> list[RoomCharges]:
        """Compute charges for every room without persisting anything."""
        resolved = resolve_readings(snapshots, readings)
        ordered = sorted(snapshots, key=lambda s: room_sort_key(s.room_number))
        return [compute_charges(s, resolved[s.room_id], rates) for s in ordered]

    def run_monthly_billing(
        self,
        snapshots: list[RoomOccupancy],
        readings: Mapping[int, int],
        rates: BillingRates,
        billing_month: date,
        due_date: date | None = None,
    ) -> BillingRunResult:
        """Create one bill per occupied room and advance each room's meter.

        Readings are validated for every room before anything is written; a bad
        reading raises ``MeterReadingError`` and nothing is persisted. After that
        each room is handled on its own: a duplicate or a failed write is recorded
        as an error outcome and the remaining rooms still get billed.
        """
        month = normalize_month(billing_month)
        due = due_date or default_due_date(month, settings.due_day)
        resolved = resolve_readings(snapshots, readings)

        result = BillingRunResult(billing_month=month, due_date=due)
        for snapshot in sorted(snapshots, key=lambda s: room_sort_key(s.room_number)):
            try:
                billing = self._bill_room(snapshot, resolved[snapshot.room_id], rates, month, due)
            except DuplicateBillingError as exc:
                logger.warning("Skipping room %s for %s: %s", snapshot.room_number, month, exc)
                result.outcomes.append(
                    RoomBillingOutcome(room_id=snapshot.room_id, room_number=snapshot.room_number, error=str(exc))
                )
                continue
            except Exception as exc:
                logger.exception("Failed to bill room %s for %s", snapshot.room_number, month)
                result.outcomes.append(
                    RoomBillingOutcome(
                        room_id=snapshot.room_id,
                        room_number=snapshot.room_number,
                        error=str(exc) or exc.__class__.__name__,
                    )
                )
                continue
            result.outcomes.append(
                RoomBillingOutcome(room_id=snapshot.room_id, room_number=snapshot.room_number, billing=billing)
            )

        logger.info(
            "Monthly billing for %s: %d created, %d failed",
            month,
            len(result.created),
            len(result.errors),
        )
        return result

    def _bill_room(
        self,
        snapshot: RoomOccupancy,
        current_reading: int,
        rates: BillingRates,
        month: date,
        due: date,
    ) -> Billing:
        if self.billing_repo.exists_for_month(snapshot.room_id, month):
            raise DuplicateBillingError(f"A bill for {month:%Y-%m} already exists for this room")

        charges = compute_charges(snapshot, current_reading, rates)
        billing = Billing(
            room_id=snapshot.room_id,
            room_number=snapshot.room_number,
            tenant_id=snapshot.tenant_ids[0] if snapshot.tenant_ids else None,
            billing_month=month,
            room_rent=charges.room_rent,
            water_units=charges.water_units,
            water_cost=charges.water_cost,
            electricity_units=charges.electricity_units,
            electricity_cost=charges.electricity_cost,
            total_amount=charges.total_amount,
            previous_meter_reading=charges.previous_meter_reading,
            current_meter_reading=charges.current_meter_reading,
            due_date=due,
            status=BillingStatus.PENDING,
            receipt_number=receipt_number(month, snapshot.room_number),
        )
        created = self.billing_repo.create(billing)
        self.room_repo.update_meter_reading(snapshot.room_id, current_reading)
        logger.info(
            "Billing created: id=%s, room=%s, month=%s, total=%s",
            created.id,
            snapshot.room_number,
            month,
            created.total_amount,
        )
        return created

    def edit_billing(
        self,
        billing: Billing,
        new_current_reading: int,
        rates: BillingRates,
        edited_by: int | None = None,
    ) -> Billing:
        room = self.room_repo.get_by_id(billing.room_id)
        if room is None or room.id is None:
            logger.warning("Edit failed: room %s for billing %s not found", billing.room_id, billing.id)
            raise NotFoundError("Room not found")

        updated = recompute_for_edit(billing, new_current_reading, room.latest_meter_reading, rates.electricity_rate)
        updated.edited_by = edited_by
        result = self.billing_repo.update_charges(updated)
        self.room_repo.update_meter_reading(room.id, new_current_reading)
        logger.info(
            "Billing updated: id=%s, units=%s, total=%s, edited_by=%s",
            result.id,
            result.electricity_units,
            result.total_amount,
            edited_by,
        )
        return result

    def mark_paid(self, billing: Billing, paid_at: datetime | None = None) -> Billing:
        if billing.id is None:
            raise ValueError("Cannot mark billing without an id as paid")
        if billing.payment_status == BillingStatus.PAID:
            logger.warning("Mark paid rejected: billing %s is already paid", billing.id)
            raise InvalidTransitionError("Billing is already paid")

        self.billing_repo.mark_paid(billing.id, paid_at or datetime.now(BKK_TZ))
        result = self.billing_repo.get_by_id(billing.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve billing after mark paid (id={billing.id})")
        logger.info("Billing %s marked as paid", billing.id)
        return result

    def list_billings(
        self,
        month: date | None = None,
        status: BillingStatus | None = None,
        search: str = "",
    ) -> list[Billing]:
        result = self.billing_repo.list_all(normalize_month(month) if month else None)
        if status is not None:
            result = [b for b in result if b.payment_status == status]
        needle = search.strip().lower()
        if needle:
            result = [
                b for b in result if needle in b.receipt_number.lower() or needle in b.room_number.lower()
            ]
        logger.debug("Listed %d billings (month=%s, status=%s, search=%r)", len(result), month, status, search)
        return result

    def get_billing(self, billing_id: int) -> Billing | None:
        result = self.billing_repo.get_by_id(billing_id)
        logger.debug("get_billing id=%s found=%s", billing_id, result is not None)
        return result

    def get_billing_by_uuid(self, uuid: str) -> Billing | None:
        result = self.billing_repo.get_by_uuid(uuid)
        logger.debug("get_billing_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result
