"""
FILE: focodiario/cli/commands/account.py
PURPOSE: Account commands (login, logout, whoami/settings)
"""

from typing import Optional

import typer
from rich.markup import escape

from ..main import app, console, error_console, open_controller
from ...core.exceptions import FocoError
from ...formatting import render_settings_view


@app.command()
def login(
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Username"),
    password: Optional[str] = typer.Option(
        None, "--password", envvar="FOCODIARIO_PASSWORD", help="Password (prompted if omitted)"
    ),
):
    """
    Log in, creating the account on first use.

    Example:
        focodiario login
        focodiario login -u ana
    """
    if username is None:
        username = typer.prompt("Username")
    if password is None:
        password = typer.prompt("Password", hide_input=True)

    with open_controller(require_login=False) as controller:
        try:
            with console.status("Signing in..."):
                session = controller.authenticate(username, password)
        except FocoError as e:
            error_console.print(f"[red]Login failed:[/red] {e}")
            raise typer.Exit(1)

        console.print(f"[green]✓ Logged in as [bold]{escape(session.user.name)}[/bold][/green]")


@app.command()
def logout(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """
    Log out of the current account.

    Example:
        focodiario logout
    """
    with open_controller() as controller:
        ended = controller.logout(
            lambda: yes or typer.confirm("Do you really want to log out?", default=False)
        )
        if ended:
            console.print("[green]✓ Logged out[/green]")
        else:
            console.print("[dim]Still logged in[/dim]")


@app.command()
def whoami():
    """Show the logged-in account."""
    with open_controller() as controller:
        console.print(render_settings_view(controller.session.user))


# Same view under the name used by the REPL tab
app.command("settings", help="Show account settings.")(whoami)
