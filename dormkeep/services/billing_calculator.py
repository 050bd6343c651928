"""Pure billing arithmetic.

Nothing in here touches a repository or global configuration: rates, readings
and the occupancy snapshot are always passed in. ``BillingService`` wraps these
functions with persistence.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Mapping
from datetime import date

from dormkeep.errors import MeterReadingError
from dormkeep.models.billing import Billing, BillingRates, RoomCharges
from dormkeep.models.room import RoomOccupancy


def normalize_month(value: date) -> date:
    """Return the first day of the month containing ``value``."""
    return value.replace(day=1)


def default_due_date(billing_month: date, due_day: int = 5) -> date:
    """Due date for a bill: ``due_day`` of the month following ``billing_month``.

    The day is clamped to the length of that month.
    """
    year, month = billing_month.year, billing_month.month + 1
    if month > 12:
        year, month = year + 1, 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(due_day, last_day)))


def receipt_number(billing_month: date, room_number: str) -> str:
    return f"INV-{billing_month:%Y%m}-{room_number}"


def room_sort_key(room_number: str) -> tuple[int, int, str]:
    """Numeric room numbers first in numeric order, anything else after."""
    try:
        return (0, int(room_number), room_number)
    except ValueError:
        return (1, 0, room_number)


def resolve_readings(
    snapshots: Iterable[RoomOccupancy],
    readings: Mapping[int, int],
) -> dict[int, int]:
    """Map every room to its current reading and reject readings that go backwards.

    A room absent from ``readings`` keeps its stored reading. Raises
    ``MeterReadingError`` listing every offending room at once.
    """
    resolved: dict[int, int] = {}
    problems: dict[int, str] = {}
    for snapshot in snapshots:
        current = readings.get(snapshot.room_id, snapshot.latest_meter_reading)
        if current < snapshot.latest_meter_reading:
            problems[snapshot.room_id] = (
                f"Room {snapshot.room_number}: current reading {current} "
                f"is below the previous reading {snapshot.latest_meter_reading}"
            )
            continue
        resolved[snapshot.room_id] = current
    if problems:
        raise MeterReadingError(problems)
    return resolved


def compute_charges(snapshot: RoomOccupancy, current_reading: int, rates: BillingRates) -> RoomCharges:
    water_units = snapshot.occupant_count
    water_cost = water_units * rates.water_rate
    electricity_units = max(current_reading - snapshot.latest_meter_reading, 0)
    electricity_cost = electricity_units * rates.electricity_rate
    return RoomCharges(
        room_id=snapshot.room_id,
        room_number=snapshot.room_number,
        occupant_count=snapshot.occupant_count,
        previous_meter_reading=snapshot.latest_meter_reading,
        current_meter_reading=current_reading,
        room_rent=rates.room_rent,
        water_units=water_units,
        water_cost=water_cost,
        electricity_units=electricity_units,
        electricity_cost=electricity_cost,
        total_amount=rates.room_rent + water_cost + electricity_cost,
    )


def recompute_for_edit(
    billing: Billing,
    new_current_reading: int,
    previous_meter_reading: int,
    electricity_rate: int,
) -> Billing:
    """Return a copy of ``billing`` with electricity and total recomputed for a corrected reading.

    The additional consumption since ``previous_meter_reading`` (the room's stored
    reading) is added on top of the units already billed. Water cost is kept as
    stored.
    """
    if new_current_reading < previous_meter_reading:
        raise MeterReadingError(
            {
                billing.room_id: (
                    f"Room {billing.room_number}: current reading {new_current_reading} "
                    f"is below the previous reading {previous_meter_reading}"
                )
            }
        )
    electricity_units = billing.electricity_units + (new_current_reading - previous_meter_reading)
    electricity_cost = max(electricity_units * electricity_rate, 0)
    return billing.model_copy(
        update={
            "electricity_units": electricity_units,
            "electricity_cost": electricity_cost,
            "total_amount": billing.room_rent + billing.water_cost + electricity_cost,
            "current_meter_reading": new_current_reading,
        }
    )
