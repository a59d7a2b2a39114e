"""
FILE: focodiario/repl/main.py
PURPOSE: Interactive REPL for daily goals with prompt-toolkit
EXPORTS:
  - main() - Entry point for REPL mode
  - run_repl(controller) - Main REPL loop
  - run_auth_screen(ctx) -> bool - Login/sign-up prompt
  - execute_command(ctx, result) -> bool
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - focodiario.core.controller (session + goal cache)
  - focodiario.repl.parser (command parsing)
  - focodiario.repl.completer (autocomplete)
NOTES:
  - While the session is unresolved nothing is rendered; once resolved the
    REPL shows either the auth screen or the dashboard
  - A logout (or a session that expires remotely) drops back to the auth screen
  - Bottom toolbar shows goal counts, badges and rotating tips
  - Right prompt shows the active tab
  - Ctrl+D or "exit"/"quit" to exit
"""

import sys
import traceback
from typing import Callable, Dict, Optional

from prompt_toolkit import PromptSession, prompt
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory

from ..core.constants import DEFAULT_TAB, TAB_ALIASES, VALID_TABS
from ..core.controller import AppController, build_controller
from ..core.exceptions import FocoError
from ..core.stats import badge_states, summarize
from .commands import (
    handle_add_command,
    handle_cancel_command,
    handle_clear_command,
    handle_help_command,
    handle_logout_command,
    handle_ls_command,
    handle_new_command,
    handle_refresh_command,
    handle_rm_command,
    handle_tab_command,
    handle_toggle_command,
    handle_whoami_command,
    make_tab_handler,
)
from .completer import create_completer
from .context import REPLContext, _simple_read_line, _simple_read_secret
from .display import console, display_header, display_tab
from .parser import ParseResult, parse_command


Handler = Callable[[REPLContext, ParseResult], None]

HANDLERS: Dict[str, Handler] = {
    "new": handle_new_command,
    "add": handle_add_command,
    "toggle": handle_toggle_command,
    "done": handle_toggle_command,
    "rm": handle_rm_command,
    "cancel": handle_cancel_command,
    "refresh": handle_refresh_command,
    "ls": handle_ls_command,
    "tab": handle_tab_command,
    "help": handle_help_command,
    "clear": handle_clear_command,
    "whoami": handle_whoami_command,
    "logout": handle_logout_command,
}
for _tab in VALID_TABS:
    HANDLERS[_tab] = make_tab_handler(_tab)
for _alias, _tab in TAB_ALIASES.items():
    HANDLERS[_alias] = make_tab_handler(_tab)


def format_prompt(ctx: REPLContext) -> HTML:
    """
    Create formatted prompt text with context and colors.

    Returns:
        HTML formatted prompt: "foco> " or "foco:[history | new]> "
    """
    parts = []
    if ctx.active_tab != DEFAULT_TAB:
        parts.append(f"<cyan>{ctx.active_tab}</cyan>")
    if ctx.form.visible:
        parts.append("<ansiyellow>new</ansiyellow>")

    if parts:
        return HTML(f"<b>foco:[{' | '.join(parts)}]&gt; </b>")
    return HTML("<b>foco&gt; </b>")


# Rotating tips for bottom toolbar
_TOOLBAR_TIPS = [
    "💡 Tip: Use 'done' without a number to get a picker",
    "💡 Tip: 'add Run --category saude' picks a category inline",
    "💡 Tip: Type 'conquistas' to see your badges",
    "💡 Tip: 'refresh' reloads goals from the server",
    "💡 Tip: Press Ctrl+D or type 'exit' to quit",
    "💡 Tip: Type 'help' to see all available commands",
]
_tip_index = 0


def get_bottom_toolbar(ctx: REPLContext) -> HTML:
    """
    Create bottom toolbar showing goal counts, badges and rotating tips.
    """
    tip = _TOOLBAR_TIPS[_tip_index % len(_TOOLBAR_TIPS)]
    if ctx.user is None:
        return HTML(f"<style bg='#444444' fg='#ffffff'> FocoDiário | {tip} </style>")

    progress = summarize(ctx.goals)
    unlocked = sum(1 for _, is_unlocked in badge_states(progress.completed) if is_unlocked)
    stats = (
        f"✓ {progress.completed} done | ○ {progress.pending} pending | "
        f"🏅 {unlocked} badges"
    )
    return HTML(f"<style bg='#444444' fg='#ffffff'> {stats} | {tip} </style>")


def get_right_prompt(ctx: REPLContext) -> HTML:
    if ctx.user is None:
        return HTML("")
    return HTML(f"<style fg='#888888'>[{ctx.active_tab}]</style>")


def run_auth_screen(ctx: REPLContext) -> bool:
    """
    Ask for username and password until a session exists.

    The first login with a new username creates the account.

    Returns:
        True once authenticated, False if the user gave up (Ctrl+C/Ctrl+D)
    """
    console.print("[bold cyan]FocoDiário[/bold cyan] [dim]Log in, or pick a username to create an account[/dim]")

    while not ctx.controller.session.is_authenticated:
        try:
            username = ctx.read_line("Username: ").strip()
            if not username:
                continue
            password = ctx.read_secret("Password: ")
        except (KeyboardInterrupt, EOFError):
            console.print()
            return False

        try:
            with console.status("Logging in..."):
                ctx.controller.authenticate(username, password)
        except FocoError as e:
            console.print(f"[red]Login failed:[/red] {e}")
            continue

    return True


def execute_command(ctx: REPLContext, result: ParseResult) -> bool:
    """
    Execute a parsed command.

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command.lower()

    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    if not command:
        return True

    handler = HANDLERS.get(command)
    if handler:
        handler(ctx, result)
    else:
        console.print(f"[red]Unknown command:[/red] {command}")
        console.print("[dim]Type 'help' for available commands[/dim]")
    console.print()

    return True


def _enter_dashboard(ctx: REPLContext) -> bool:
    """Show the auth screen if needed, then the header and active tab."""
    if not ctx.controller.session.is_authenticated:
        if not run_auth_screen(ctx):
            return False
        console.print()
    display_header(ctx)
    display_tab(ctx)
    console.print()
    return True


def run_repl(controller: Optional[AppController] = None) -> None:
    """
    Main REPL loop.

    Args:
        controller: Controller to drive; built from the configuration when
            omitted, in which case it is also closed on exit

    Exits on:
    - Ctrl+D (EOFError)
    - "exit" or "quit" commands
    - Ctrl+C/Ctrl+D on the auth screen
    """
    global _tip_index

    owns_controller = controller is None
    if controller is None:
        controller = build_controller()

    has_tty = sys.stdin.isatty() and sys.stdout.isatty()
    ctx = REPLContext(controller=controller)

    session = None
    if has_tty:
        try:
            session = PromptSession(
                history=InMemoryHistory(),
                completer=create_completer(ctx),
                complete_while_typing=True,
                bottom_toolbar=lambda: get_bottom_toolbar(ctx),
                rprompt=lambda: get_right_prompt(ctx),
            )
        except Exception as e:
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {e}")
            session = None

    if session is not None:
        ctx.read_line = lambda message, default="": prompt(message, default=default)
        ctx.read_secret = lambda message: prompt(message, is_password=True)
    else:
        ctx.read_line = _simple_read_line
        ctx.read_secret = _simple_read_secret

    console.print("[bold cyan]FocoDiário REPL[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if session is None:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()

    try:
        with console.status("Connecting..."):
            controller.start()

        if not _enter_dashboard(ctx):
            return

        while True:
            try:
                if session is None:
                    user_input = input(ctx.get_prompt())
                else:
                    user_input = session.prompt(lambda: format_prompt(ctx))

                if not execute_command(ctx, parse_command(user_input)):
                    break

                if not controller.session.is_authenticated:
                    ctx.active_tab = DEFAULT_TAB
                    if not _enter_dashboard(ctx):
                        break

                _tip_index += 1

            except KeyboardInterrupt:
                console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
                continue
            except EOFError:
                console.print()
                console.print("[dim]Goodbye![/dim]")
                break
            except Exception as e:
                # Unexpected error - show but don't crash
                console.print(f"[red]Unexpected error:[/red] {e}")
                console.print("[dim]" + traceback.format_exc() + "[/dim]")
    finally:
        if owns_controller:
            controller.close()


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: focodiario repl
    """
    try:
        run_repl()
    except FocoError:
        raise
    except Exception as e:
        console.print(f"[red]Fatal error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
