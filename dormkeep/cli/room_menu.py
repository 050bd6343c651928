from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from dormkeep.errors import DormkeepError
from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.room import RoomStatus
from dormkeep.services.audit_serializers import serialize_room
from dormkeep.services.audit_service import SOURCE_CLI, AuditService
from dormkeep.services.room_service import RoomService

console = Console()


def room_management_menu(room_service: RoomService, audit_service: AuditService) -> None:
    while True:
        choice = questionary.select(
            "Rooms",
            choices=["List Rooms", "Create Room", "Change Room Status", "Back"],
        ).ask()

        if choice is None or choice == "Back":
            break
        elif choice == "List Rooms":
            _list_rooms(room_service)
        elif choice == "Create Room":
            _create_room(room_service, audit_service)
        elif choice == "Change Room Status":
            _change_status(room_service, audit_service)


def _list_rooms(room_service: RoomService) -> None:
    rooms = room_service.list_rooms()
    if not rooms:
        console.print("[yellow]No rooms registered.[/yellow]")
        return

    table = Table(title="Rooms")
    table.add_column("Room", style="bold")
    table.add_column("Type")
    table.add_column("Floor", justify="right")
    table.add_column("Occupants", justify="right")
    table.add_column("Meter", justify="right")
    table.add_column("Status")
    for r in rooms:
        occupants = room_service.occupant_count(r.id) if r.id is not None else 0
        table.add_row(
            r.room_number,
            r.room_type or "-",
            str(r.floor),
            f"{occupants}/{r.capacity}",
            str(r.latest_meter_reading),
            r.status.value,
        )
    console.print()
    console.print(table)
    console.print()


def _ask_int(message: str, default: str) -> int | None:
    while True:
        value = questionary.text(message, default=default).ask()
        if value is None:
            return None
        if value.strip().isdigit() and int(value) > 0:
            return int(value)
        console.print("[red]Enter a positive whole number.[/red]")


def _create_room(room_service: RoomService, audit_service: AuditService) -> None:
    console.print()
    console.print("[bold]New Room[/bold]", style="cyan")

    number = questionary.text("Room number:").ask()
    if not number:
        console.print("[yellow]Operation cancelled.[/yellow]")
        return
    room_type = questionary.text("Room type (optional):").ask() or ""
    floor = _ask_int("Floor:", "1")
    if floor is None:
        return
    capacity = _ask_int("Capacity:", "1")
    if capacity is None:
        return

    try:
        room = room_service.create_room(number, room_type=room_type, floor=floor, capacity=capacity)
    except DormkeepError as e:
        console.print(f"[red]{e}[/red]")
        return

    audit_service.safe_record(
        AuditEventType.ROOM_CREATE,
        source=SOURCE_CLI,
        entity_type="room",
        entity_id=room.id,
        entity_uuid=room.uuid,
        new_state=serialize_room(room),
    )
    console.print(f"[green bold]Room {room.room_number} created.[/green bold]")


def _change_status(room_service: RoomService, audit_service: AuditService) -> None:
    rooms = room_service.list_rooms()
    if not rooms:
        console.print("[yellow]No rooms registered.[/yellow]")
        return

    room_choices = {f"{r.room_number} ({r.status.value})": r for r in rooms}
    choice = questionary.select("Select a room:", choices=list(room_choices.keys()) + ["Back"]).ask()
    if choice is None or choice == "Back":
        return
    room = room_choices[choice]

    status_str = questionary.select("New status:", choices=[s.value for s in RoomStatus]).ask()
    if status_str is None:
        return

    previous_state = serialize_room(room)
    updated = room_service.change_status(room, RoomStatus(status_str))
    audit_service.safe_record(
        AuditEventType.ROOM_CHANGE_STATUS,
        source=SOURCE_CLI,
        entity_type="room",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_room(updated),
    )
    console.print(f"[green]Room {updated.room_number} is now {updated.status.value}.[/green]")
