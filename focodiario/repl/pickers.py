"""
FILE: focodiario/repl/pickers.py
PURPOSE: Inline numbered pickers for categories and goals
EXPORTS:
  - pick_category(read_line, default) -> Optional[str]
  - pick_goal(read_line, goals, title) -> Optional[Goal]
NOTES:
  - Prints a numbered list and reads the choice with read_line
  - Returns None on cancel or an invalid choice (after printing why)
"""

from typing import Callable, List, Optional

from rich.markup import escape

from ..core.constants import CATEGORIES, DEFAULT_CATEGORY
from ..core.exceptions import InvalidInputError
from ..core.models import Goal
from ..formatting import category_markup, parse_category
from .display import console


def pick_category(read_line: Callable[..., str], default: str = DEFAULT_CATEGORY) -> Optional[str]:
    """
    Ask for a category by number or name.

    Pressing Enter keeps the default.
    """
    default_number = 1
    for idx, category in enumerate(CATEGORIES, 1):
        if category.name == default:
            default_number = idx
        console.print(f"  [{idx}] {category_markup(category.name)}")

    selection = read_line("Category: ", str(default_number)).strip()
    if not selection:
        return default

    if selection.isdigit():
        number = int(selection)
        if 1 <= number <= len(CATEGORIES):
            return CATEGORIES[number - 1].name
        console.print(f"[red]Error:[/red] Number {number} out of range (1-{len(CATEGORIES)})")
        return None

    try:
        return parse_category(selection)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        return None


def pick_goal(
    read_line: Callable[..., str],
    goals: List[Goal],
    title: str = "Select a goal",
) -> Optional[Goal]:
    """
    Show goals as a numbered list and return the chosen one.

    Returns None when the list is empty, the user presses Enter or Ctrl+C,
    or the choice is not a valid number.
    """
    if not goals:
        console.print("[yellow]No goals yet[/yellow]")
        return None

    # Limit to 20 goals for readability
    goals = goals[:20]

    console.print(f"\n[bold cyan]{title}[/bold cyan]")
    for idx, goal in enumerate(goals, 1):
        mark = "[green]✓[/green]" if goal.completed else "[dim]○[/dim]"
        console.print(f"  [{idx}] {mark} {escape(goal.title)} [dim]({goal.category})[/dim]")

    console.print()
    try:
        selection = read_line("Select number (or press Enter to cancel): ").strip()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return None

    if not selection:
        return None

    try:
        number = int(selection)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid number: {selection}")
        return None

    if not 1 <= number <= len(goals):
        console.print(f"[red]Error:[/red] Number {number} out of range (1-{len(goals)})")
        return None

    return goals[number - 1]
