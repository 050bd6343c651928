from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from dormkeep.errors import DormkeepError
from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.room import Room, RoomStatus
from dormkeep.models.tenant import Tenant
from dormkeep.services.audit_serializers import serialize_tenant
from dormkeep.services.audit_service import SOURCE_CLI, AuditService
from dormkeep.services.room_service import RoomService
from dormkeep.services.tenant_service import TenantService

console = Console()


def tenant_management_menu(
    tenant_service: TenantService,
    room_service: RoomService,
    audit_service: AuditService,
) -> None:
    while True:
        choice = questionary.select(
            "Tenants",
            choices=["List Tenants", "Onboard Tenant", "Move Tenant", "Check Out Tenant", "Back"],
        ).ask()

        if choice is None or choice == "Back":
            break
        elif choice == "List Tenants":
            _list_tenants(tenant_service)
        elif choice == "Onboard Tenant":
            _onboard(tenant_service, room_service, audit_service)
        elif choice == "Move Tenant":
            _move(tenant_service, room_service, audit_service)
        elif choice == "Check Out Tenant":
            _check_out(tenant_service, audit_service)


def _list_tenants(tenant_service: TenantService) -> None:
    tenants = tenant_service.list_tenants()
    if not tenants:
        console.print("[yellow]No tenants registered.[/yellow]")
        return

    table = Table(title="Tenants")
    table.add_column("Name", style="bold")
    table.add_column("Room")
    table.add_column("Phone")
    table.add_column("Email")
    for t in tenants:
        table.add_row(t.full_name, t.room_number or "-", t.phone or "-", t.email or "-")
    console.print()
    console.print(table)
    console.print()


def _select_tenant(tenant_service: TenantService) -> Tenant | None:
    tenants = tenant_service.list_tenants()
    if not tenants:
        console.print("[yellow]No tenants registered.[/yellow]")
        return None
    tenant_choices = {f"{t.full_name} (room {t.room_number or '-'})": t for t in tenants}
    choice = questionary.select("Select a tenant:", choices=list(tenant_choices.keys()) + ["Back"]).ask()
    if choice is None or choice == "Back":
        return None
    return tenant_choices[choice]


def _select_room(room_service: RoomService) -> Room | None:
    rooms = [r for r in room_service.list_rooms() if r.status != RoomStatus.MAINTENANCE]
    if not rooms:
        console.print("[yellow]No rooms available.[/yellow]")
        return None
    room_choices = {}
    for r in rooms:
        occupants = room_service.occupant_count(r.id) if r.id is not None else 0
        room_choices[f"{r.room_number} ({occupants}/{r.capacity})"] = r
    choice = questionary.select("Select a room:", choices=list(room_choices.keys()) + ["Back"]).ask()
    if choice is None or choice == "Back":
        return None
    return room_choices[choice]


def _onboard(tenant_service: TenantService, room_service: RoomService, audit_service: AuditService) -> None:
    console.print()
    console.print("[bold]New Tenant[/bold]", style="cyan")

    first_name = questionary.text("First name:").ask()
    if not first_name:
        console.print("[yellow]Operation cancelled.[/yellow]")
        return
    last_name = questionary.text("Last name:").ask() or ""
    phone = questionary.text("Phone (optional):").ask() or ""
    email = questionary.text("Email (optional):").ask() or ""

    room = _select_room(room_service)
    if room is None:
        return

    try:
        tenant = tenant_service.onboard_tenant(
            Tenant(first_name=first_name, last_name=last_name, phone=phone, email=email), room
        )
    except DormkeepError as e:
        console.print(f"[red]{e}[/red]")
        return

    audit_service.safe_record(
        AuditEventType.TENANT_ONBOARD,
        source=SOURCE_CLI,
        entity_type="tenant",
        entity_id=tenant.id,
        entity_uuid=tenant.uuid,
        new_state=serialize_tenant(tenant),
    )
    console.print(f"[green bold]{tenant.full_name} moved into room {room.room_number}.[/green bold]")


def _move(tenant_service: TenantService, room_service: RoomService, audit_service: AuditService) -> None:
    tenant = _select_tenant(tenant_service)
    if tenant is None:
        return
    room = _select_room(room_service)
    if room is None:
        return

    previous_state = serialize_tenant(tenant)
    try:
        moved = tenant_service.assign_room(tenant, room)
    except DormkeepError as e:
        console.print(f"[red]{e}[/red]")
        return

    audit_service.safe_record(
        AuditEventType.TENANT_ASSIGN_ROOM,
        source=SOURCE_CLI,
        entity_type="tenant",
        entity_id=moved.id,
        entity_uuid=moved.uuid,
        previous_state=previous_state,
        new_state=serialize_tenant(moved),
    )
    console.print(f"[green]{moved.full_name} moved to room {room.room_number}.[/green]")


def _check_out(tenant_service: TenantService, audit_service: AuditService) -> None:
    tenant = _select_tenant(tenant_service)
    if tenant is None:
        return
    if not questionary.confirm(f"Check out {tenant.full_name}?", default=False).ask():
        return

    tenant_service.check_out(tenant)
    audit_service.safe_record(
        AuditEventType.TENANT_CHECK_OUT,
        source=SOURCE_CLI,
        entity_type="tenant",
        entity_id=tenant.id,
        entity_uuid=tenant.uuid,
        previous_state=serialize_tenant(tenant),
    )
    console.print(f"[green]{tenant.full_name} checked out.[/green]")
