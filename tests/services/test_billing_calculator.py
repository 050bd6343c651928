from datetime import date

import pytest

from dormkeep.errors import MeterReadingError
from dormkeep.models.billing import BillingRates
from dormkeep.services.billing_calculator import (
    compute_charges,
    default_due_date,
    normalize_month,
    receipt_number,
    recompute_for_edit,
    resolve_readings,
    room_sort_key,
)

# 20 / 7 / 3000 baht in satang
RATES = BillingRates(water_rate=2000, electricity_rate=700, room_rent=300000)


class TestComputeCharges:
    def test_worked_example(self, sample_snapshot):
        charges = compute_charges(sample_snapshot(), 150, RATES)

        assert charges.water_units == 2
        assert charges.water_cost == 4000
        assert charges.electricity_units == 50
        assert charges.electricity_cost == 35000
        assert charges.room_rent == 300000
        assert charges.total_amount == 339000
        assert charges.previous_meter_reading == 100
        assert charges.current_meter_reading == 150

    @pytest.mark.parametrize(
        ("occupants", "previous", "current"),
        [(1, 0, 0), (1, 0, 1), (3, 1234, 1500), (4, 99999, 100250)],
    )
    def test_total_is_exact_sum(self, sample_snapshot, occupants, previous, current):
        snapshot = sample_snapshot(occupant_count=occupants, latest_meter_reading=previous)
        charges = compute_charges(snapshot, current, RATES)

        assert charges.electricity_units == current - previous
        assert charges.total_amount == (
            RATES.room_rent + occupants * RATES.water_rate + (current - previous) * RATES.electricity_rate
        )

    def test_no_consumption(self, sample_snapshot):
        charges = compute_charges(sample_snapshot(), 100, RATES)
        assert charges.electricity_units == 0
        assert charges.electricity_cost == 0
        assert charges.total_amount == 304000


class TestResolveReadings:
    def test_missing_room_keeps_previous_reading(self, sample_snapshot):
        snapshots = [sample_snapshot(room_id=1), sample_snapshot(room_id=2, room_number="102", latest_meter_reading=40)]
        assert resolve_readings(snapshots, {1: 150}) == {1: 150, 2: 40}

    def test_backwards_reading_rejected(self, sample_snapshot):
        with pytest.raises(MeterReadingError) as exc_info:
            resolve_readings([sample_snapshot()], {1: 90})
        assert 1 in exc_info.value.problems
        assert "below the previous reading 100" in str(exc_info.value)

    def test_reports_every_bad_room(self, sample_snapshot):
        snapshots = [
            sample_snapshot(room_id=1, room_number="101"),
            sample_snapshot(room_id=2, room_number="102"),
            sample_snapshot(room_id=3, room_number="103"),
        ]
        with pytest.raises(MeterReadingError) as exc_info:
            resolve_readings(snapshots, {1: 50, 2: 150, 3: 10})
        assert set(exc_info.value.problems) == {1, 3}

    def test_equal_reading_accepted(self, sample_snapshot):
        assert resolve_readings([sample_snapshot()], {1: 100}) == {1: 100}


class TestRecomputeForEdit:
    def test_adds_extra_consumption(self, sample_billing):
        billing = sample_billing(id=1)
        updated = recompute_for_edit(billing, 160, 150, 700)

        assert updated.electricity_units == 60
        assert updated.electricity_cost == 42000
        assert updated.water_cost == 4000
        assert updated.total_amount == 300000 + 4000 + 42000
        assert updated.current_meter_reading == 160
        # The original is untouched
        assert billing.electricity_units == 50

    def test_same_reading_keeps_totals(self, sample_billing):
        updated = recompute_for_edit(sample_billing(), 150, 150, 700)
        assert updated.electricity_units == 50
        assert updated.total_amount == 339000

    def test_rate_change_applies_to_all_units(self, sample_billing):
        updated = recompute_for_edit(sample_billing(), 150, 150, 800)
        assert updated.electricity_cost == 40000
        assert updated.total_amount == 344000

    def test_backwards_reading_rejected(self, sample_billing):
        with pytest.raises(MeterReadingError):
            recompute_for_edit(sample_billing(), 140, 150, 700)


class TestDates:
    def test_normalize_month(self):
        assert normalize_month(date(2025, 3, 17)) == date(2025, 3, 1)

    def test_default_due_date(self):
        assert default_due_date(date(2025, 3, 1)) == date(2025, 4, 5)

    def test_default_due_date_year_rollover(self):
        assert default_due_date(date(2024, 12, 1)) == date(2025, 1, 5)

    def test_default_due_date_clamped(self):
        assert default_due_date(date(2025, 1, 1), due_day=31) == date(2025, 2, 28)
        assert default_due_date(date(2024, 1, 1), due_day=31) == date(2024, 2, 29)


class TestFormatting:
    def test_receipt_number(self):
        assert receipt_number(date(2025, 3, 1), "101") == "INV-202503-101"

    def test_room_sort_key_numeric(self):
        rooms = ["1001", "101", "99", "A1", "201"]
        assert sorted(rooms, key=room_sort_key) == ["99", "101", "201", "1001", "A1"]
