"""
FILE: focodiario/repl/commands/views.py
PURPOSE: Tab switching handlers for REPL
"""

from typing import Callable

from ..context import REPLContext
from ..display import console, display_tab
from ..parser import ParseResult
from ...core.constants import VALID_TABS
from ...core.exceptions import InvalidInputError


def handle_tab_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'tab' command - show or switch the active tab.

    Usage:
        tab                 # Show current tab
        tab history         # Switch to history
        tab conquistas      # Portuguese aliases work too
    """
    if not result.args:
        console.print(f"Current tab: [cyan]{ctx.active_tab}[/cyan]")
        console.print(f"[dim]Tabs: {', '.join(VALID_TABS)}[/dim]")
        return

    try:
        ctx.set_tab(result.args[0])
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    display_tab(ctx)


def make_tab_handler(tab: str) -> Callable[[REPLContext, ParseResult], None]:
    """Handler that switches straight to one tab (e.g. 'history', 'metas')."""

    def handler(ctx: REPLContext, result: ParseResult) -> None:
        ctx.set_tab(tab)
        display_tab(ctx)

    handler.__name__ = f"handle_{tab}_command"
    return handler
