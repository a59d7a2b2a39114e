"""
FILE: focodiario/repl/display.py
PURPOSE: Console and display helpers for the REPL
EXPORTS:
  - console (Rich console shared by REPL modules)
  - display_tab(ctx) - Render the active tab
  - display_header(ctx) - Greeting with the user's name and date
NOTES:
  - Lives apart from main.py so command handlers can import the console
    without a circular import
"""

from rich.console import Console

from ..formatting import render_header, render_tab

console = Console()


def display_header(ctx, console_instance: Console = None) -> None:
    if console_instance is None:
        console_instance = console
    if ctx.user is not None:
        console_instance.print(render_header(ctx.user))
        console_instance.print()


def display_tab(ctx, console_instance: Console = None) -> None:
    """Render the view for ctx.active_tab from the current cache contents."""
    if console_instance is None:
        console_instance = console
    if ctx.user is None:
        console_instance.print("[dim]Not logged in[/dim]")
        return
    console_instance.print(render_tab(ctx.active_tab, ctx.goals, ctx.user))
