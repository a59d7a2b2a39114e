"""
FILE: focodiario/cli/commands/system.py
PURPOSE: System commands (version, help, repl)
"""

import typer

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, error_console, __version__
from ...core.exceptions import FocoError


@app.command()
def version():
    """Show FocoDiário version."""
    console.print(f"FocoDiário v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]FocoDiário[/bold cyan] - Daily goal tracker for the terminal\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  focodiario [command] [options]")
    console.print("  focodiario                [dim]# Launch interactive REPL (default)[/dim]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("login", "Log in (creates the account on first use)", "focodiario login [-u NAME]"),
        ("logout", "Log out", "focodiario logout [--yes]"),
        ("whoami", "Show the logged-in account", "focodiario whoami"),
        ("add", "Create a goal", 'focodiario add "Goal title" [-c CATEGORY]'),
        ("ls", "List goals with progress", "focodiario ls [--json|--raw]"),
        ("toggle", "Mark a goal done / reopen it", "focodiario toggle <number>"),
        ("rm", "Delete a goal", "focodiario rm <number>"),
        ("history", "Show completed goals", "focodiario history [--json|--raw]"),
        ("achievements", "Show badges", "focodiario achievements [--json]"),
        ("categories", "List categories", "focodiario categories"),
        ("repl", "Launch interactive REPL", "focodiario repl"),
        ("version", "Show version", "focodiario version"),
        ("help", "Show this help message", "focodiario help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:12}[/green] {desc}")
        console.print(f"               [dim]{example}[/dim]\n")

    console.print("[bold]Configuration:[/bold]")
    console.print("  [yellow]FOCODIARIO_SUPABASE_URL[/yellow]   Backend URL")
    console.print("  [yellow]FOCODIARIO_SUPABASE_KEY[/yellow]   Backend API key")
    console.print("  [dim]or ~/.config/focodiario/config.json[/dim]\n")


@app.command()
def repl():
    """
    Launch interactive REPL mode.

    Example:
        focodiario repl
    """
    # Import here to avoid loading REPL dependencies for one-shot commands
    from ...repl import main as repl_main

    try:
        repl_main()
    except FocoError as e:
        error_console.print(f"[red]Error starting REPL:[/red] {e}")
        raise typer.Exit(1)
