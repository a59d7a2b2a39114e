"""
FILE: focodiario/repl/commands/goals.py
PURPOSE: Goal command handlers for REPL (new, add, toggle, rm, cancel, refresh, ls)
"""

from typing import Optional

from rich.markup import escape

from ..context import REPLContext
from ..display import console, display_tab
from ..parser import ParseResult
from ..pickers import pick_category, pick_goal
from ..style import celebrate_add, celebrate_badge, celebrate_delete, celebrate_done
from ...core.constants import DEFAULT_CATEGORY, TAB_GOALS
from ...core.exceptions import FocoError, InvalidInputError
from ...core.models import Goal
from ...core.stats import unlocked_between
from ...formatting import category_markup, parse_category, resolve_goal_ref


def _select_goal(ctx: REPLContext, result: ParseResult, title: str) -> Optional[Goal]:
    """Goal named by the first argument, or picked interactively when there is none."""
    if not result.args:
        return pick_goal(ctx.read_line, ctx.goals, title)
    try:
        return resolve_goal_ref(ctx.goals, result.args[0])
    except FocoError as e:
        console.print(f"[red]Error:[/red] {e}")
        return None


def _submit_form(ctx: REPLContext) -> None:
    try:
        with console.status("Saving..."):
            goal = ctx.form.submit(ctx.controller.cache)
    except InvalidInputError as e:
        console.print(f"[dim]{e}[/dim]")
        return
    except FocoError as e:
        console.print(f"[red]Could not create goal:[/red] {e}")
        console.print("[dim]Your input was kept: type 'new' to retry or 'cancel' to discard it[/dim]")
        return

    console.print(
        f"[green]{celebrate_add()} Created:[/green] {escape(goal.title)} {category_markup(goal.category)}"
    )


def handle_new_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'new' command - open the creation form.

    Prompts for the title and the category. An empty title or Ctrl+C
    dismisses the form.

    Usage:
        new
    """
    form = ctx.form
    form.open()
    console.print("[bold]New goal[/bold] [dim](empty title or Ctrl+C to cancel)[/dim]")

    try:
        title = ctx.read_line("Goal: ", form.title)
        if not title.strip():
            form.dismiss()
            console.print("[dim]Cancelled[/dim]")
            return
        form.title = title

        category = pick_category(ctx.read_line, form.category)
        if category is None:
            return
        form.category = category
    except (KeyboardInterrupt, EOFError):
        form.dismiss()
        console.print()
        console.print("[dim]Cancelled[/dim]")
        return

    _submit_form(ctx)


def handle_cancel_command(ctx: REPLContext, result: ParseResult) -> None:
    """Handle 'cancel' command - discard the creation form's input."""
    if not ctx.form.visible:
        console.print("[dim]Nothing to cancel[/dim]")
        return
    ctx.form.dismiss()
    console.print("[dim]Discarded new goal[/dim]")


def handle_add_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'add' command - create a goal in one line.

    Usage:
        add Morning run
        add "Read 20 pages" --category estudos
    """
    if not result.args:
        console.print("[red]Error:[/red] Goal title required")
        console.print("[dim]Usage: add <title> [--category <name>]  (or 'new' for the form)[/dim]")
        return

    title = " ".join(result.args)
    category_flag = result.flags.get("category")

    try:
        category = parse_category(category_flag) if isinstance(category_flag, str) else DEFAULT_CATEGORY
        with console.status("Saving..."):
            goal = ctx.controller.cache.create(title, category)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        return
    except FocoError as e:
        console.print(f"[red]Could not create goal:[/red] {e}")
        return

    console.print(
        f"[green]{celebrate_add()} Created:[/green] {escape(goal.title)} {category_markup(goal.category)}"
    )


def handle_toggle_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'toggle'/'done' command - mark a goal done or reopen it.

    Usage:
        toggle 2
        done            (picker)
    """
    goal = _select_goal(ctx, result, "Toggle which goal?")
    if goal is None:
        return

    cache = ctx.controller.cache
    before = len(cache.completed())
    try:
        with console.status("Saving..."):
            updated = cache.toggle(goal.id)
    except FocoError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    if updated is None:
        console.print(f"[red]Error:[/red] Goal {goal.id} not found")
        return

    if updated.completed:
        console.print(f"[green]{celebrate_done()} Done:[/green] {escape(updated.title)}")
        for badge in unlocked_between(before, len(cache.completed())):
            console.print(celebrate_badge(badge))
    else:
        console.print(f"[yellow]○ Reopened:[/yellow] {escape(updated.title)}")


def handle_rm_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'rm' command - delete a goal.

    Usage:
        rm 3
        rm              (picker)
    """
    goal = _select_goal(ctx, result, "Delete which goal?")
    if goal is None:
        return

    try:
        with console.status("Deleting..."):
            deleted = ctx.controller.cache.delete(goal.id)
    except FocoError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    if deleted:
        console.print(f"[green]{celebrate_delete()} Deleted:[/green] {escape(goal.title)}")
    else:
        console.print(f"[red]Error:[/red] Goal {goal.id} not found")


def handle_ls_command(ctx: REPLContext, result: ParseResult) -> None:
    """Handle 'ls' command - switch to the goals tab and show it."""
    ctx.active_tab = TAB_GOALS
    display_tab(ctx)


def handle_refresh_command(ctx: REPLContext, result: ParseResult) -> None:
    """Handle 'refresh' command - refetch goals from the backend."""
    with console.status("Loading..."):
        ctx.controller.refresh()
    display_tab(ctx)
