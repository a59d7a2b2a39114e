"""
FILE: focodiario/cli/commands/goals.py
PURPOSE: Goal commands (add, ls, toggle, rm, categories)
"""

import json

import typer
from rich.markup import escape
from rich.table import Table

from ..main import app, console, error_console, open_controller
from ...core.constants import CATEGORIES, DEFAULT_CATEGORY
from ...core.exceptions import FocoError, InvalidInputError
from ...formatting import (
    GoalFormatter,
    category_markup,
    parse_category,
    render_goals_view,
    resolve_goal_ref,
)


@app.command()
def add(
    title: str = typer.Argument(..., help="Goal title"),
    category: str = typer.Option(DEFAULT_CATEGORY, "--category", "-c", help="Goal category"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new goal.

    Example:
        focodiario add "Morning run" --category saude
    """
    try:
        category_name = parse_category(category)
    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    with open_controller() as controller:
        try:
            with console.status("Saving..."):
                goal = controller.cache.create(title, category_name)
        except InvalidInputError as e:
            error_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        except FocoError as e:
            error_console.print(f"[red]Could not create goal:[/red] {e}")
            raise typer.Exit(1)

        if json_output:
            console.print_json(goal.to_json())
        elif raw:
            console.print(f"{goal.id}: {goal.title}", markup=False, highlight=False, soft_wrap=True)
        else:
            console.print(
                f"[green]✓ Created goal:[/green] {escape(goal.title)} {category_markup(goal.category)}"
            )


@app.command()
def ls(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List goals, newest first, with today's progress.

    Example:
        focodiario ls
        focodiario ls --json
    """
    with open_controller() as controller:
        goals = controller.cache.goals

        if json_output:
            console.print_json(GoalFormatter.to_json_array(goals))
        elif raw:
            for line in GoalFormatter.to_raw_lines(goals):
                console.print(line, markup=False, highlight=False, soft_wrap=True)
        else:
            console.print(render_goals_view(goals))


@app.command()
def toggle(
    ref: str = typer.Argument(..., help="Goal number (from 'ls') or id"),
):
    """
    Mark a goal as done, or reopen it if it is already done.

    Example:
        focodiario toggle 2
    """
    with open_controller() as controller:
        try:
            goal = resolve_goal_ref(controller.cache.goals, ref)
            with console.status("Saving..."):
                updated = controller.cache.toggle(goal.id)
        except FocoError as e:
            error_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

        if updated is None:
            error_console.print(f"[red]Error:[/red] Goal {ref} not found")
            raise typer.Exit(1)

        if updated.completed:
            console.print(f"[green]✓ Done:[/green] {escape(updated.title)}")
        else:
            console.print(f"[yellow]○ Reopened:[/yellow] {escape(updated.title)}")


@app.command()
def rm(
    ref: str = typer.Argument(..., help="Goal number (from 'ls') or id"),
):
    """
    Delete a goal.

    Example:
        focodiario rm 3
    """
    with open_controller() as controller:
        try:
            goal = resolve_goal_ref(controller.cache.goals, ref)
            with console.status("Deleting..."):
                deleted = controller.cache.delete(goal.id)
        except FocoError as e:
            error_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

        if not deleted:
            error_console.print(f"[red]Error:[/red] Goal {ref} not found")
            raise typer.Exit(1)

        console.print(f"[green]✓ Deleted:[/green] {escape(goal.title)}")


@app.command()
def categories(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List the goal categories."""
    if json_output:
        console.print_json(json.dumps([c.name for c in CATEGORIES], ensure_ascii=False))
        return

    table = Table(show_header=False, box=None)
    table.add_column("Category")
    for category in CATEGORIES:
        table.add_row(category_markup(category.name))
    console.print(table)
