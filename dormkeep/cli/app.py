from __future__ import annotations

from dataclasses import dataclass

import questionary
from rich.console import Console

from dormkeep.cli.billing_menu import list_billings_menu, run_monthly_billing_menu
from dormkeep.cli.room_menu import room_management_menu
from dormkeep.cli.settings_menu import settings_menu
from dormkeep.cli.tenant_menu import tenant_management_menu
from dormkeep.cli.user_menu import user_management_menu
from dormkeep.repositories.factory import (
    get_audit_log_repository,
    get_billing_repository,
    get_occupancy_repository,
    get_room_repository,
    get_settings_repository,
    get_tenant_repository,
    get_user_repository,
)
from dormkeep.services.audit_service import AuditService
from dormkeep.services.billing_service import BillingService
from dormkeep.services.room_service import RoomService
from dormkeep.services.settings_service import SettingsService
from dormkeep.services.tenant_service import TenantService
from dormkeep.services.user_service import UserService

console = Console()


@dataclass
class Services:
    billing: BillingService
    rooms: RoomService
    tenants: TenantService
    settings: SettingsService
    users: UserService
    audit: AuditService


def _build_services() -> Services:
    room_repo = get_room_repository()
    occupancy_repo = get_occupancy_repository()
    user_repo = get_user_repository()
    return Services(
        billing=BillingService(get_billing_repository(), room_repo),
        rooms=RoomService(room_repo, occupancy_repo),
        tenants=TenantService(get_tenant_repository(), occupancy_repo, room_repo, user_repo),
        settings=SettingsService(get_settings_repository()),
        users=UserService(user_repo),
        audit=AuditService(get_audit_log_repository()),
    )


def main_menu() -> None:
    services = _build_services()

    console.print()
    console.print("[bold]Dormkeep[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Run Monthly Billing",
                "List Bills",
                "Rooms",
                "Tenants",
                "Settings",
                "Users",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Run Monthly Billing":
            run_monthly_billing_menu(services.billing, services.rooms, services.settings, services.audit)
        elif choice == "List Bills":
            list_billings_menu(services.billing, services.settings, services.audit)
        elif choice == "Rooms":
            room_management_menu(services.rooms, services.audit)
        elif choice == "Tenants":
            tenant_management_menu(services.tenants, services.rooms, services.audit)
        elif choice == "Settings":
            settings_menu(services.settings, services.audit)
        elif choice == "Users":
            user_management_menu(services.users, services.audit)
