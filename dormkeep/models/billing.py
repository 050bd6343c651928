from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from dormkeep.constants import BKK_TZ


class BillingStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class BillingRates(BaseModel):
    water_rate: int = Field(default=0, ge=0)  # satang per occupant
    electricity_rate: int = Field(default=0, ge=0)  # satang per unit
    room_rent: int = Field(default=0, ge=0)  # satang


class RoomCharges(BaseModel):
    room_id: int
    room_number: str
    occupant_count: int
    previous_meter_reading: int
    current_meter_reading: int
    room_rent: int
    water_units: int
    water_cost: int
    electricity_units: int
    electricity_cost: int
    total_amount: int


class Billing(BaseModel):
    id: int | None = None
    uuid: str = ""
    room_id: int
    room_number: str = ""
    tenant_id: int | None = None
    billing_month: date  # always the first day of the month
    room_rent: int = 0  # satang
    water_units: int = 0
    water_cost: int = 0
    electricity_units: int = 0
    electricity_cost: int = 0
    total_amount: int = 0
    previous_meter_reading: int = 0
    current_meter_reading: int = 0
    due_date: date | None = None
    paid_date: datetime | None = None
    status: BillingStatus = BillingStatus.PENDING
    receipt_number: str = ""
    edited_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_overdue(self) -> bool:
        if self.paid_date is not None or self.status == BillingStatus.PAID:
            return False
        if self.due_date is None:
            return False
        return datetime.now(BKK_TZ).date() > self.due_date

    @property
    def payment_status(self) -> BillingStatus:
        if self.paid_date is not None or self.status == BillingStatus.PAID:
            return BillingStatus.PAID
        if self.is_overdue:
            return BillingStatus.OVERDUE
        return BillingStatus.PENDING


class RoomBillingOutcome(BaseModel):
    room_id: int
    room_number: str
    billing: Billing | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.billing is not None and not self.error


class BillingRunResult(BaseModel):
    billing_month: date
    due_date: date
    outcomes: list[RoomBillingOutcome] = []

    @property
    def created(self) -> list[Billing]:
        return [o.billing for o in self.outcomes if o.ok and o.billing is not None]

    @property
    def errors(self) -> list[str]:
        return [f"Room {o.room_number}: {o.error}" for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def partial(self) -> bool:
        return bool(self.created) and bool(self.errors)
