from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from dormkeep.errors import DormkeepError
from dormkeep.models.audit_log import AuditEventType
from dormkeep.models.user import UserRole
from dormkeep.services.audit_serializers import serialize_user
from dormkeep.services.audit_service import SOURCE_CLI, AuditService
from dormkeep.services.user_service import UserService

console = Console()


def user_management_menu(user_service: UserService, audit_service: AuditService) -> None:
    while True:
        choice = questionary.select(
            "Users",
            choices=["Create User", "Change Password", "List Users", "Back"],
        ).ask()

        if choice is None or choice == "Back":
            break
        elif choice == "Create User":
            _create_user(user_service, audit_service)
        elif choice == "Change Password":
            _change_password(user_service, audit_service)
        elif choice == "List Users":
            _list_users(user_service)


def _ask_new_password(prompt: str) -> str | None:
    password = questionary.password(prompt).ask()
    if not password:
        console.print("[yellow]Operation cancelled.[/yellow]")
        return None
    confirm = questionary.password("Confirm password:").ask()
    if password != confirm:
        console.print("[red]Passwords do not match.[/red]")
        return None
    return password


def _create_user(user_service: UserService, audit_service: AuditService) -> None:
    console.print()
    console.print("[bold]New User[/bold]", style="cyan")

    username = questionary.text("Username:").ask()
    if not username:
        console.print("[yellow]Operation cancelled.[/yellow]")
        return

    role_str = questionary.select("Role:", choices=[r.value for r in UserRole], default=UserRole.STAFF.value).ask()
    if role_str is None:
        return

    password = _ask_new_password("Password:")
    if password is None:
        return

    try:
        user = user_service.create_user(username, password, role=UserRole(role_str))
    except DormkeepError as e:
        console.print(f"[red]Could not create user: {e}[/red]")
        return

    audit_service.safe_record(
        AuditEventType.USER_CREATE,
        source=SOURCE_CLI,
        entity_type="user",
        entity_id=user.id,
        new_state=serialize_user(user),
    )
    console.print(f"[green bold]User '{user.username}' created.[/green bold]")


def _change_password(user_service: UserService, audit_service: AuditService) -> None:
    users = user_service.list_users()
    if not users:
        console.print("[yellow]No users registered.[/yellow]")
        return

    username = questionary.select("Select a user:", choices=[u.username for u in users] + ["Back"]).ask()
    if username is None or username == "Back":
        return

    password = _ask_new_password("New password:")
    if password is None:
        return

    user_service.change_password(username, password)
    target = next((u for u in users if u.username == username), None)
    audit_service.safe_record(
        AuditEventType.USER_CHANGE_PASSWORD,
        source=SOURCE_CLI,
        entity_type="user",
        entity_id=target.id if target else None,
        metadata={"username": username},
    )
    console.print(f"[green bold]Password for '{username}' changed.[/green bold]")


def _list_users(user_service: UserService) -> None:
    users = user_service.list_users()
    if not users:
        console.print("[yellow]No users registered.[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("#", style="dim")
    table.add_column("Username", style="bold")
    table.add_column("Role")
    table.add_column("Created")
    for u in users:
        created = u.created_at.strftime("%d/%m/%Y %H:%M") if u.created_at else "-"
        table.add_row(str(u.id), u.username, u.role.value, created)
    console.print()
    console.print(table)
    console.print()
