"""
FILE: focodiario/repl/commands/system.py
PURPOSE: System command handlers for REPL (help, clear, whoami, logout)
"""

from rich.markup import escape
from rich.panel import Panel

from ..context import REPLContext
from ..display import console
from ..parser import ParseResult
from ...core.exceptions import FocoError


def _confirm(ctx: REPLContext, message: str) -> bool:
    try:
        answer = ctx.read_line(message).strip().lower()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return False
    return answer in ("y", "yes", "s", "sim")


def handle_help_command(ctx: REPLContext, result: ParseResult) -> None:
    """Handle 'help' command - show available commands."""
    help_text = """
[bold cyan]Goals:[/bold cyan]

  [cyan]new[/cyan]                          Open the form to create a goal
  [cyan]add <title> [--category <name>][/cyan]  Create a goal in one line
  [cyan]toggle [<n>][/cyan] / [cyan]done [<n>][/cyan]      Mark a goal done or reopen it (picker if no number)
  [cyan]rm [<n>][/cyan]                     Delete a goal (picker if no number)
  [cyan]cancel[/cyan]                       Discard the input kept from a failed 'new'
  [cyan]refresh[/cyan]                      Reload goals from the server
  [cyan]ls[/cyan]                           Show the goals tab

[bold cyan]Tabs:[/bold cyan]

  [cyan]goals[/cyan] / [cyan]metas[/cyan]                Goals with daily progress
  [cyan]history[/cyan] / [cyan]historico[/cyan]          Completed goals
  [cyan]achievements[/cyan] / [cyan]conquistas[/cyan]    Badges
  [cyan]settings[/cyan] / [cyan]ajustes[/cyan]           Account details
  [cyan]tab [<name>][/cyan]                 Show or switch the active tab

[bold cyan]Account:[/bold cyan]

  [cyan]whoami[/cyan]                       Show who is logged in
  [cyan]logout[/cyan]                       Log out (asks for confirmation)

[bold cyan]Other:[/bold cyan]

  [cyan]help[/cyan]                         Show this help
  [cyan]clear[/cyan]                        Clear the screen
  [cyan]exit[/cyan] or [cyan]quit[/cyan]                Exit REPL

[bold cyan]Categories:[/bold cyan] [dim]Saúde, Trabalho, Pessoal, Estudos, Finanças (accents optional)[/dim]

[bold cyan]Examples:[/bold cyan]

  [dim]add Morning run --category saude
  add "Read 20 pages" --category Estudos
  done 2
  rm                          # Shows picker
  conquistas[/dim]
"""
    console.print(Panel(help_text, title="FocoDiário REPL Help", border_style="cyan"))


def handle_clear_command(ctx: REPLContext, result: ParseResult) -> None:
    """Clear the screen."""
    console.clear()
    console.print("[dim]Screen cleared[/dim]")


def handle_whoami_command(ctx: REPLContext, result: ParseResult) -> None:
    user = ctx.user
    if user is None:
        console.print("[dim]Not logged in[/dim]")
        return
    console.print(f"Logged in as [bold]{escape(user.name)}[/bold] [dim]({user.email})[/dim]")


def handle_logout_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'logout' command - end the session after confirmation.

    Answering anything but y/yes keeps the session. After a confirmed
    logout the REPL returns to the login screen.
    """
    try:
        logged_out = ctx.controller.logout(lambda: _confirm(ctx, "Do you really want to log out? (y/n) "))
    except FocoError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    if logged_out:
        ctx.form.dismiss()
        console.print("[green]✓ Logged out[/green]")
    else:
        console.print("[dim]Still logged in[/dim]")
