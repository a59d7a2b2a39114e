"""
FILE: focodiario/formatting.py
PURPOSE: View renderers and input helpers shared by the CLI and REPL
EXPORTS:
  - GoalFormatter: tables, JSON and plain-text output for goals
  - render_header(user) / render_progress_card(progress)
  - render_goals_view(goals) / render_history_view(goals)
  - render_achievements_view(completed_count) / render_settings_view(user)
  - render_tab(tab, goals, user)
  - parse_category(text) -> str
  - resolve_goal_ref(goals, ref) -> Goal
  - format_relative_date(iso_string) -> str
DEPENDENCIES:
  - rich (tables, panels, text)
  - focodiario.core (models, constants, stats)
NOTES:
  - Renderers are pure: they take goals/user and return Rich renderables
  - Goals are addressed by 1-based position in the goals view, or by id
"""

import json
import unicodedata
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core.constants import (
    CATEGORIES,
    TAB_ACHIEVEMENTS,
    TAB_GOALS,
    TAB_HISTORY,
    TAB_SETTINGS,
)
from .core.exceptions import GoalNotFoundError, InvalidInputError
from .core.models import Category, Goal, User, parse_timestamp
from .core.stats import Progress, badge_states, completed_goals, summarize


def find_category(name: str) -> Optional[Category]:
    for category in CATEGORIES:
        if category.name == name:
            return category
    return None


def category_markup(name: str) -> str:
    category = find_category(name)
    if category is None:
        return escape(name)
    return f"{category.icon} [{category.color}]{escape(category.name)}[/{category.color}]"


class GoalFormatter:
    """Centralized goal display formatting."""

    @staticmethod
    def create_table(
        goals: List[Goal],
        title: Optional[str] = None,
        show_dates: bool = True,
    ) -> Table:
        """
        Create Rich table for goals.

        Args:
            goals: Goals to display, in display order
            title: Table title
            show_dates: Whether to show the relative creation date

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("#", style="cyan", width=4, no_wrap=True)
        table.add_column("", width=2, no_wrap=True)
        table.add_column("Goal", style="white")
        table.add_column("Category", no_wrap=True)
        if show_dates:
            table.add_column("Created", style="dim", no_wrap=True)

        for position, goal in enumerate(goals, 1):
            if goal.completed:
                mark = "[green]✓[/green]"
                title_cell = f"[strike dim]{escape(goal.title)}[/strike dim]"
            else:
                mark = "[dim]○[/dim]"
                title_cell = escape(goal.title)

            row = [str(position), mark, title_cell, category_markup(goal.category)]
            if show_dates:
                row.append(format_relative_date(goal.created_at))
            table.add_row(*row)

        return table

    @staticmethod
    def to_json_array(goals: List[Goal]) -> str:
        return json.dumps([g.to_dict() for g in goals], indent=2, ensure_ascii=False)

    @staticmethod
    def to_raw_lines(goals: List[Goal]) -> List[str]:
        """
        Convert goals to plain text lines.

        Format: "<position>: [x] <title> (<category>) <id>"
        """
        lines = []
        for position, goal in enumerate(goals, 1):
            marker = "x" if goal.completed else " "
            lines.append(f"{position}: [{marker}] {goal.title} ({goal.category}) {goal.id}")
        return lines


# --- Views ---


def render_header(user: User, today: Optional[datetime] = None) -> Text:
    today = today or datetime.now()
    header = Text()
    header.append(f"Olá, {user.name}!", style="bold")
    header.append(f"\n{today.strftime('%a, %d %b')}", style="dim")
    return header


def render_progress_card(progress: Progress) -> Panel:
    bar_width = 20
    filled = round(bar_width * progress.percentage / 100)
    bar = f"[green]{'█' * filled}[/green][dim]{'░' * (bar_width - filled)}[/dim]"
    body = (
        f"[bold]{progress.percentage}%[/bold] [dim]complete[/dim]  {bar}\n"
        f"[dim]{progress.completed} of {progress.total} goals finished[/dim]"
    )
    return Panel(body, title="Daily progress", title_align="left", expand=False)


def render_goals_view(goals: List[Goal]) -> RenderableType:
    parts: List[RenderableType] = [render_progress_card(summarize(goals))]
    parts.append(Text.from_markup(f"\n[bold]My goals[/bold] [dim]({len(goals)} total)[/dim]"))
    if goals:
        parts.append(GoalFormatter.create_table(goals))
    else:
        parts.append(Text("Nothing here yet. Add a goal with 'new' or 'add <title>'.", style="dim"))
    return Group(*parts)


def render_history_view(goals: List[Goal]) -> RenderableType:
    done = completed_goals(goals)
    parts: List[RenderableType] = [Text("Completed", style="bold")]
    if not done:
        parts.append(Text("No history yet.", style="dim"))
        return Group(*parts)

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("", width=2)
    table.add_column("Goal")
    table.add_column("Category", no_wrap=True)
    for goal in done:
        table.add_row(
            "[green]📅[/green]",
            f"[strike dim]{escape(goal.title)}[/strike dim]",
            category_markup(goal.category),
        )
    parts.append(table)
    return Group(*parts)


def render_achievements_view(completed_count: int) -> RenderableType:
    panels = []
    for badge, unlocked in badge_states(completed_count):
        if unlocked:
            body = f"{badge.icon}\n[bold]{badge.name}[/bold]\n[dim]{badge.description}[/dim]"
            panels.append(Panel(body, border_style=badge.color, width=26))
        else:
            body = f"🔒\n[dim]{badge.name}[/dim]\n[dim]{badge.description}[/dim]"
            panels.append(Panel(body, border_style="dim", width=26))
    return Group(Text("Achievements", style="bold"), Columns(panels))


def render_settings_view(user: User) -> RenderableType:
    account = Panel(
        f"[bold]{escape(user.name)}[/bold]\n[dim]{escape(user.email)}[/dim]",
        title="Account",
        title_align="left",
        expand=False,
    )
    logout = Text.from_markup("[red]logout[/red] [dim]Sign out of this account[/dim]")
    return Group(Text("Settings", style="bold"), account, logout)


def render_tab(tab: str, goals: List[Goal], user: User) -> RenderableType:
    """Render the view for one of the four tabs."""
    if tab == TAB_HISTORY:
        return render_history_view(goals)
    if tab == TAB_ACHIEVEMENTS:
        return render_achievements_view(len(completed_goals(goals)))
    if tab == TAB_SETTINGS:
        return render_settings_view(user)
    if tab == TAB_GOALS:
        return render_goals_view(goals)
    raise InvalidInputError(f"Unknown tab '{tab}'")


# --- Input helpers ---


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def parse_category(text: str) -> str:
    """
    Resolve typed input to a category name.

    Matching ignores case and accents ("saude" -> "Saúde").

    Raises:
        InvalidInputError: If no category matches
    """
    folded = _fold(text)
    for category in CATEGORIES:
        if _fold(category.name) == folded:
            return category.name
    names = ", ".join(c.name for c in CATEGORIES)
    raise InvalidInputError(f"Invalid category '{text}'. Must be one of: {names}")


def resolve_goal_ref(goals: List[Goal], ref: str) -> Goal:
    """
    Find a goal by 1-based position in the list, or by id.

    Raises:
        GoalNotFoundError: If nothing matches
    """
    ref = ref.strip()
    if ref.isdigit():
        position = int(ref)
        if 1 <= position <= len(goals):
            return goals[position - 1]
    for goal in goals:
        if goal.id == ref:
            return goal
    raise GoalNotFoundError(ref)


def format_relative_date(iso_string: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Convert an ISO timestamp to a short relative string.

    Returns "just now", "5 minutes ago", "3 hours ago", "yesterday",
    "4 days ago", "Jan 15" or "Jan 15, 2024". Missing dates give "-";
    unparseable strings come back unchanged.
    """
    if not iso_string:
        return "-"

    try:
        dt = parse_timestamp(iso_string)
    except (ValueError, AttributeError):
        return iso_string

    now = now or datetime.now(timezone.utc)
    seconds = (now - dt).total_seconds()

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        minutes = int(seconds / 60)
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    if seconds < 86400:
        hours = int(seconds / 3600)
        return f"{hours} hour{'s' if hours != 1 else ''} ago"

    local_dt = dt.astimezone(now.tzinfo)
    if local_dt.date() == (now - timedelta(days=1)).date():
        return "yesterday"

    days = int(seconds / 86400)
    if days < 7:
        return f"{days} day{'s' if days != 1 else ''} ago"
    if local_dt.year == now.year:
        return local_dt.strftime("%b %d")
    return local_dt.strftime("%b %d, %Y")
