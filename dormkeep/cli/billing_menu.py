from __future__ import annotations

from datetime import date, datetime

import questionary
from rich.console import Console
from rich.table import Table

from dormkeep.constants import BKK_TZ, format_month
from dormkeep.errors import DormkeepError, MeterReadingError
from dormkeep.models import format_baht
from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.billing import Billing, BillingStatus
from dormkeep.services.audit_serializers import serialize_billing
from dormkeep.services.audit_service import SOURCE_CLI, AuditService
from dormkeep.services.billing_service import BillingService
from dormkeep.services.room_service import RoomService
from dormkeep.services.settings_service import SettingsService

console = Console()

_STATUS_STYLE = {
    BillingStatus.PAID: "green",
    BillingStatus.PENDING: "yellow",
    BillingStatus.OVERDUE: "red",
}


def parse_month(text: str) -> date | None:
    """Parse 'YYYY-MM' into the first day of that month."""
    try:
        return datetime.strptime(text.strip(), "%Y-%m").date()
    except ValueError:
        return None


def parse_reading(text: str) -> int | None:
    text = text.strip()
    if not text.isdigit():
        return None
    return int(text)


def run_monthly_billing_menu(
    billing_service: BillingService,
    room_service: RoomService,
    settings_service: SettingsService,
    audit_service: AuditService,
) -> None:
    console.print()
    console.print("[bold]Monthly Billing[/bold]", style="cyan")

    default_month = datetime.now(BKK_TZ).strftime("%Y-%m")
    month_str = questionary.text("Billing month (YYYY-MM):", default=default_month).ask()
    if not month_str:
        console.print("[yellow]Operation cancelled.[/yellow]")
        return
    month = parse_month(month_str)
    if month is None:
        console.print("[red]Invalid month. Use the YYYY-MM format.[/red]")
        return

    snapshots = room_service.occupancy_snapshot()
    if not snapshots:
        console.print("[yellow]No occupied rooms to bill.[/yellow]")
        return

    rates = settings_service.get_rates()
    console.print(
        f"  [dim]Rent {format_baht(rates.room_rent)} · water {format_baht(rates.water_rate)}/person"
        f" · electricity {format_baht(rates.electricity_rate)}/unit[/dim]"
    )

    readings: dict[int, int] = {}
    for snapshot in snapshots:
        while True:
            value = questionary.text(
                f"  Room {snapshot.room_number} meter (previous {snapshot.latest_meter_reading}):",
                default=str(snapshot.latest_meter_reading),
            ).ask()
            if value is None:
                console.print("[yellow]Operation cancelled.[/yellow]")
                return
            reading = parse_reading(value)
            if reading is None:
                console.print("[red]Enter a whole number.[/red]")
                continue
            if reading < snapshot.latest_meter_reading:
                console.print(
                    f"[red]Reading must be at least the previous reading ({snapshot.latest_meter_reading}).[/red]"
                )
                continue
            readings[snapshot.room_id] = reading
            break

    try:
        charges = billing_service.preview(snapshots, readings, rates)
    except MeterReadingError as e:
        for problem in e.problems.values():
            console.print(f"[red]{problem}[/red]")
        return

    table = Table(title=f"Preview · {format_month(month)}")
    table.add_column("Room", style="bold")
    table.add_column("Occupants", justify="right")
    table.add_column("Units", justify="right")
    table.add_column("Rent", justify="right")
    table.add_column("Water", justify="right")
    table.add_column("Electricity", justify="right")
    table.add_column("Total", justify="right", style="bold")
    for c in charges:
        table.add_row(
            c.room_number,
            str(c.occupant_count),
            str(c.electricity_units),
            format_baht(c.room_rent),
            format_baht(c.water_cost),
            format_baht(c.electricity_cost),
            format_baht(c.total_amount),
        )
    console.print()
    console.print(table)

    if not questionary.confirm(f"Create {len(charges)} bills for {format_month(month)}?", default=True).ask():
        console.print("[yellow]Operation cancelled.[/yellow]")
        return

    try:
        result = billing_service.run_monthly_billing(snapshots, readings, rates, month)
    except MeterReadingError as e:
        for problem in e.problems.values():
            console.print(f"[red]{problem}[/red]")
        return

    for billing in result.created:
        audit_service.safe_record(
            AuditEventType.BILLING_CREATE,
            source=SOURCE_CLI,
            entity_type="billing",
            entity_id=billing.id,
            entity_uuid=billing.uuid,
            new_state=serialize_billing(billing),
        )

    console.print()
    if result.created:
        console.print(f"[green bold]{len(result.created)} bills created (due {result.due_date:%d/%m/%Y}).[/green bold]")
    for error in result.errors:
        console.print(f"[red]{error}[/red]")


def list_billings_menu(
    billing_service: BillingService,
    settings_service: SettingsService,
    audit_service: AuditService,
) -> None:
    month_str = questionary.text("Filter by month (YYYY-MM, empty for all):").ask()
    if month_str is None:
        return
    month = parse_month(month_str) if month_str.strip() else None
    if month_str.strip() and month is None:
        console.print("[red]Invalid month. Use the YYYY-MM format.[/red]")
        return

    status_str = questionary.select("Status:", choices=["All", "Pending", "Overdue", "Paid"]).ask()
    if status_str is None:
        return
    status = None if status_str == "All" else BillingStatus(status_str.lower())

    search = questionary.text("Search receipt or room (optional):").ask() or ""

    billings = billing_service.list_billings(month=month, status=status, search=search)
    if not billings:
        console.print("[yellow]No bills found.[/yellow]")
        return

    table = Table(title="Bills")
    table.add_column("Receipt", style="dim")
    table.add_column("Room", style="bold")
    table.add_column("Month")
    table.add_column("Total", justify="right")
    table.add_column("Due")
    table.add_column("Status")
    for b in billings:
        st = b.payment_status
        due = b.due_date.strftime("%d/%m/%Y") if b.due_date else "-"
        table.add_row(
            b.receipt_number,
            b.room_number,
            format_month(b.billing_month),
            format_baht(b.total_amount),
            due,
            f"[{_STATUS_STYLE[st]}]{st.value}[/{_STATUS_STYLE[st]}]",
        )
    console.print()
    console.print(table)
    console.print()

    billing_choices = {f"{b.receipt_number} - {format_baht(b.total_amount)}": b for b in billings}
    choices = list(billing_choices.keys()) + ["Back"]
    choice = questionary.select("Select a bill:", choices=choices).ask()
    if choice is None or choice == "Back":
        return

    _billing_detail_menu(billing_choices[choice], billing_service, settings_service, audit_service)


def _billing_detail_menu(
    billing: Billing,
    billing_service: BillingService,
    settings_service: SettingsService,
    audit_service: AuditService,
) -> None:
    while True:
        console.print()
        console.print(f"[bold cyan]{billing.receipt_number}[/bold cyan] · room {billing.room_number}")
        console.print(
            f"  Meter {billing.previous_meter_reading} → {billing.current_meter_reading}"
            f" ({billing.electricity_units} units)"
        )
        console.print(
            f"  Rent {format_baht(billing.room_rent)} · water {format_baht(billing.water_cost)}"
            f" · electricity {format_baht(billing.electricity_cost)}"
        )
        console.print(f"  [bold]Total {format_baht(billing.total_amount)}[/bold] · {billing.payment_status.value}")

        choice = questionary.select(
            "Actions:",
            choices=["Mark as Paid", "Edit Meter Reading", "Back"],
        ).ask()

        if choice is None or choice == "Back":
            break
        elif choice == "Mark as Paid":
            billing = _mark_paid(billing, billing_service, audit_service)
        elif choice == "Edit Meter Reading":
            billing = _edit_reading(billing, billing_service, settings_service, audit_service)


def _mark_paid(billing: Billing, billing_service: BillingService, audit_service: AuditService) -> Billing:
    if not questionary.confirm(f"Mark {billing.receipt_number} as paid?", default=False).ask():
        return billing
    previous_state = serialize_billing(billing)
    try:
        updated = billing_service.mark_paid(billing)
    except DormkeepError as e:
        console.print(f"[red]{e}[/red]")
        return billing

    audit_service.safe_record(
        AuditEventType.BILLING_MARK_PAID,
        source=SOURCE_CLI,
        entity_type="billing",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_billing(updated),
    )
    console.print("[green]Bill marked as paid.[/green]")
    return updated


def _edit_reading(
    billing: Billing,
    billing_service: BillingService,
    settings_service: SettingsService,
    audit_service: AuditService,
) -> Billing:
    value = questionary.text("New current meter reading:", default=str(billing.current_meter_reading)).ask()
    if value is None:
        return billing
    reading = parse_reading(value)
    if reading is None:
        console.print("[red]Enter a whole number.[/red]")
        return billing

    previous_state = serialize_billing(billing)
    try:
        updated = billing_service.edit_billing(billing, reading, settings_service.get_rates())
    except DormkeepError as e:
        console.print(f"[red]{e}[/red]")
        return billing

    audit_service.safe_record(
        AuditEventType.BILLING_UPDATE,
        source=SOURCE_CLI,
        entity_type="billing",
        entity_id=updated.id,
        entity_uuid=updated.uuid,
        previous_state=previous_state,
        new_state=serialize_billing(updated),
    )
    console.print(f"[green]Bill updated: total {format_baht(updated.total_amount)}.[/green]")
    return updated
