from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from dormkeep.models.billing import BillingRates


class SystemSettings(BaseModel):
    water_rate: int = Field(default=0, ge=0)  # satang per occupant
    electricity_rate: int = Field(default=0, ge=0)  # satang per unit
    room_rent: int = Field(default=0, ge=0)  # satang per month
    late_fee: int = Field(default=0, ge=0)
    floor_count: int = Field(default=1, ge=1)
    updated_by: int | None = None
    updated_at: datetime | None = None

    def to_rates(self) -> BillingRates:
        return BillingRates(
            water_rate=self.water_rate,
            electricity_rate=self.electricity_rate,
            room_rent=self.room_rent,
        )
