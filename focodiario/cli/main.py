"""
FILE: focodiario/cli/main.py
PURPOSE: Typer-based CLI for one-shot goal commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - build_controller() -> AppController
  - open_controller(require_login) -> context manager yielding AppController
  - version() / help() / repl()
  - login() / logout() / whoami() / settings()
  - add() / ls() / toggle() / rm() / categories()
  - history() / achievements()
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - focodiario.core (controller, config, logging)
  - focodiario.repl (interactive mode)
NOTES:
  - Listing commands support --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Each command builds its own controller and closes it on the way out
"""

import sys
from contextlib import contextmanager
from typing import Iterator

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console

from ..core.controller import AppController, build_controller
from ..core.exceptions import FocoError

# Typer app setup
app = typer.Typer(
    name="focodiario",
    help="Daily goal tracker for the terminal",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Version
__version__ = "0.1.0"


@contextmanager
def open_controller(require_login: bool = True) -> Iterator[AppController]:
    """
    Yield a started controller, closing it afterwards.

    Exits with status 1 when configuration is missing or, with
    require_login, when nobody is logged in.
    """
    try:
        controller = build_controller()
    except FocoError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        with console.status("Connecting..."):
            controller.start()
        if require_login and not controller.session.is_authenticated:
            error_console.print("[red]Error:[/red] Not logged in. Run 'focodiario login' first.")
            raise typer.Exit(1)
        yield controller
    finally:
        controller.close()


@app.callback(invoke_without_command=True)
def default_command(ctx: typer.Context):
    """
    Default callback - launches REPL when no command is specified.
    """
    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except FocoError as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)


# Import command modules to register commands with app
from .commands import (
    # System commands
    version,
    help,
    repl,
    # Account commands
    login,
    logout,
    whoami,
    # Goal commands
    add,
    ls,
    toggle,
    rm,
    categories,
    # View commands
    history,
    achievements,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
