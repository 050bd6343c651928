from __future__ import annotations

import questionary
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from dormkeep.models import format_baht, parse_baht
from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.system_settings import SystemSettings
from dormkeep.services.audit_serializers import serialize_settings
from dormkeep.services.audit_service import SOURCE_CLI, AuditService
from dormkeep.services.settings_service import SettingsService

console = Console()


def _show(current: SystemSettings) -> None:
    table = Table(title="System Settings")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Room rent", format_baht(current.room_rent))
    table.add_row("Water rate (per person)", format_baht(current.water_rate))
    table.add_row("Electricity rate (per unit)", format_baht(current.electricity_rate))
    table.add_row("Late fee", format_baht(current.late_fee))
    table.add_row("Floors", str(current.floor_count))
    console.print()
    console.print(table)
    console.print()


def _ask_amount(message: str, current: int) -> int | None:
    while True:
        value = questionary.text(message, default=f"{current / 100:.2f}").ask()
        if value is None:
            return None
        parsed = parse_baht(value)
        if parsed is not None and parsed >= 0:
            return parsed
        console.print("[red]Invalid amount. Try again.[/red]")


def settings_menu(settings_service: SettingsService, audit_service: AuditService) -> None:
    current = settings_service.get_settings()
    _show(current)

    if not questionary.confirm("Edit settings?", default=False).ask():
        return

    room_rent = _ask_amount("Room rent (e.g. 3000.00):", current.room_rent)
    if room_rent is None:
        return
    water_rate = _ask_amount("Water rate per person:", current.water_rate)
    if water_rate is None:
        return
    electricity_rate = _ask_amount("Electricity rate per unit:", current.electricity_rate)
    if electricity_rate is None:
        return
    late_fee = _ask_amount("Late fee:", current.late_fee)
    if late_fee is None:
        return
    floors = questionary.text("Floors:", default=str(current.floor_count)).ask()
    if floors is None:
        return

    try:
        updated = SystemSettings(
            room_rent=room_rent,
            water_rate=water_rate,
            electricity_rate=electricity_rate,
            late_fee=late_fee,
            floor_count=int(floors) if floors.strip().isdigit() else 0,
        )
    except ValidationError:
        console.print("[red]Invalid settings. Floors must be at least 1.[/red]")
        return

    saved = settings_service.save_settings(updated)
    audit_service.safe_record(
        AuditEventType.SETTINGS_UPDATE,
        source=SOURCE_CLI,
        entity_type="system_settings",
        entity_id=1,
        previous_state=serialize_settings(current),
        new_state=serialize_settings(saved),
    )
    console.print("[green bold]Settings saved.[/green bold]")
