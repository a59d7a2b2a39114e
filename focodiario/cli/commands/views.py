"""
FILE: focodiario/cli/commands/views.py
PURPOSE: Read-only views (history, achievements)
"""

import json

import typer

from ..main import app, console, open_controller
from ...core.stats import badge_states, completed_goals
from ...formatting import GoalFormatter, render_achievements_view, render_history_view


@app.command()
def history(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show completed goals.

    Example:
        focodiario history
    """
    with open_controller() as controller:
        goals = controller.cache.goals
        done = completed_goals(goals)

        if json_output:
            console.print_json(GoalFormatter.to_json_array(done))
        elif raw:
            for line in GoalFormatter.to_raw_lines(done):
                console.print(line, markup=False, highlight=False, soft_wrap=True)
        else:
            console.print(render_history_view(goals))


@app.command()
def achievements(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show achievement badges and whether they are unlocked.

    Example:
        focodiario achievements
    """
    with open_controller() as controller:
        completed_count = len(controller.cache.completed())

        if json_output:
            data = [
                {"name": badge.name, "threshold": badge.threshold, "unlocked": unlocked}
                for badge, unlocked in badge_states(completed_count)
            ]
            console.print_json(json.dumps(data, ensure_ascii=False))
        else:
            console.print(render_achievements_view(completed_count))
