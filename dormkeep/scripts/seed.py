"""Seed the database with demo data for local development.

Usage:
    python -m dormkeep.scripts.seed
"""

from __future__ import annotations

import random
from datetime import date, datetime

from faker import Faker
from rich.console import Console
from rich.table import Table
from sqlalchemy import text

from dormkeep.constants import BKK_TZ, format_month
from dormkeep.db import get_connection, initialize_db
from dormkeep.models import format_baht
from dormkeep.models.system_settings import SystemSettings
from dormkeep.models.tenant import Tenant
from dormkeep.models.user import UserRole
from dormkeep.repositories.factory import (
    get_announcement_repository,
    get_billing_repository,
    get_occupancy_repository,
    get_room_repository,
    get_settings_repository,
    get_tenant_repository,
    get_user_repository,
)
from dormkeep.services.announcement_service import AnnouncementService
from dormkeep.services.billing_service import BillingService
from dormkeep.services.room_service import RoomService
from dormkeep.services.settings_service import SettingsService
from dormkeep.services.tenant_service import TenantService
from dormkeep.services.user_service import UserService

console = Console()
fake = Faker("th_TH")

ADMIN_USERNAME = "admin"
STAFF_USERNAME = "staff"
PASSWORD = "password"
FLOORS = 3
ROOMS_PER_FLOOR = 6
MONTHS_OF_HISTORY = 3

# Child tables first so foreign keys never block the delete.
TABLES_TO_CLEAR = [
    "audit_logs",
    "billings",
    "occupancy",
    "users",
    "tenants",
    "announcements",
    "staffs",
    "system_settings",
    "rooms",
]

ANNOUNCEMENTS = [
    ("Water shut-off on Saturday", "Maintenance on the main pipe from 09:00 to 12:00.", True),
    ("Rent due by the 5th", "Please settle this month's bill before the due date.", False),
    ("New parking rules", "Motorbikes must be parked in the back lot.", False),
]


def _clear_all(conn) -> None:
    console.print("\n[yellow]Clearing all tables...[/yellow]")
    for table in TABLES_TO_CLEAR:
        conn.execute(text(f"DELETE FROM {table}"))  # noqa: S608
        console.print(f"  Cleared [dim]{table}[/dim]")
    conn.commit()
    console.print("[green]All tables cleared.[/green]\n")


def _months_back(today: date, count: int) -> list[date]:
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        month -= 1
        if month == 0:
            year, month = year - 1, 12
        months.append(date(year, month, 1))
    return list(reversed(months))


def main() -> None:
    console.print("[bold magenta]Dormkeep - Database Seeder[/bold magenta]")
    console.print("=" * 40)

    initialize_db()
    _clear_all(get_connection())

    room_repo = get_room_repository()
    occupancy_repo = get_occupancy_repository()
    user_repo = get_user_repository()

    user_service = UserService(user_repo)
    settings_service = SettingsService(get_settings_repository())
    room_service = RoomService(room_repo, occupancy_repo)
    tenant_service = TenantService(get_tenant_repository(), occupancy_repo, room_repo, user_repo)
    billing_service = BillingService(get_billing_repository(), room_repo)
    announcement_service = AnnouncementService(get_announcement_repository())

    console.print("[cyan]Creating users and settings...[/cyan]")
    admin = user_service.create_user(ADMIN_USERNAME, PASSWORD, role=UserRole.ADMIN)
    user_service.create_user(STAFF_USERNAME, PASSWORD, role=UserRole.STAFF)
    settings_service.save_settings(
        SystemSettings(water_rate=2000, electricity_rate=700, room_rent=300000, floor_count=FLOORS),
        updated_by=admin.id,
    )

    console.print("[cyan]Creating rooms and tenants...[/cyan]")
    tenant_count = 0
    for floor in range(1, FLOORS + 1):
        for n in range(1, ROOMS_PER_FLOOR + 1):
            capacity = random.choice([1, 2, 2, 3])
            room = room_service.create_room(f"{floor}{n:02d}", room_type="standard", floor=floor, capacity=capacity)
            for _ in range(random.randint(0, capacity)):
                tenant_service.onboard_tenant(
                    Tenant(
                        first_name=fake.first_name(),
                        last_name=fake.last_name(),
                        phone=fake.phone_number(),
                        email=fake.free_email(),
                    ),
                    room_service.get_room(room.id) or room,
                )
                tenant_count += 1
    console.print(f"[green]{FLOORS * ROOMS_PER_FLOOR} rooms, {tenant_count} tenants.[/green]\n")

    console.print("[cyan]Running monthly billing...[/cyan]")
    table = Table(title="Bills")
    table.add_column("Month")
    table.add_column("Room", style="bold")
    table.add_column("Units", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Status")

    rates = settings_service.get_rates()
    today = datetime.now(BKK_TZ).date()
    total_bills = 0
    for i, month in enumerate(_months_back(today, MONTHS_OF_HISTORY)):
        snapshots = room_service.occupancy_snapshot()
        readings = {s.room_id: s.latest_meter_reading + random.randint(40, 300) for s in snapshots}
        result = billing_service.run_monthly_billing(snapshots, readings, rates, month)
        for billing in result.created:
            # Everything but the latest month is mostly settled
            if i < MONTHS_OF_HISTORY - 1 and random.random() > 0.2:
                billing = billing_service.mark_paid(billing)
            status = billing.payment_status.value
            table.add_row(
                format_month(month),
                billing.room_number,
                str(billing.electricity_units),
                format_baht(billing.total_amount),
                status,
            )
            total_bills += 1

    console.print(table)

    for title, content, important in ANNOUNCEMENTS:
        announcement_service.create_announcement(title, content, important=important, created_by=admin.id)

    console.print("[bold green]Seeding complete![/bold green]")
    console.print(f"  Rooms:         {FLOORS * ROOMS_PER_FLOOR}")
    console.print(f"  Tenants:       {tenant_count}")
    console.print(f"  Bills:         {total_bills}")
    console.print(f"  Announcements: {len(ANNOUNCEMENTS)}")
    console.print(f"\n  Login with: [bold]{ADMIN_USERNAME}[/bold] / [bold]{PASSWORD}[/bold]")


if __name__ == "__main__":  # pragma: no cover
    main()
