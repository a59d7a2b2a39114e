"""
FILE: focodiario/core/stats.py
PURPOSE: Progress and achievement figures derived from the goal list
EXPORTS:
  - Progress (dataclass)
  - completed_goals(goals) -> List[Goal]
  - count_completed(goals) -> int
  - progress_percentage(completed, total) -> int
  - summarize(goals) -> Progress
  - badge_states(completed_count) -> List[Tuple[Badge, bool]]
  - unlocked_between(before, after) -> List[Badge]
NOTES:
  - Pure functions of the cache contents, nothing is stored
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .constants import BADGES
from .models import Badge, Goal


@dataclass
class Progress:
    completed: int
    total: int

    @property
    def pending(self) -> int:
        return max(0, self.total - self.completed)

    @property
    def percentage(self) -> int:
        return progress_percentage(self.completed, self.total)


def completed_goals(goals: Iterable[Goal]) -> List[Goal]:
    return [g for g in goals if g.completed]


def count_completed(goals: Iterable[Goal]) -> int:
    return sum(1 for g in goals if g.completed)


def progress_percentage(completed: int, total: int) -> int:
    """Completed share as a whole percentage, rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    return int(math.floor(completed * 100 / total + 0.5))


def summarize(goals: Iterable[Goal]) -> Progress:
    goals = list(goals)
    return Progress(completed=count_completed(goals), total=len(goals))


def badge_states(completed_count: int) -> List[Tuple[Badge, bool]]:
    """Each badge paired with whether completed_count has unlocked it."""
    return [(badge, completed_count >= badge.threshold) for badge in BADGES]


def unlocked_between(before: int, after: int) -> List[Badge]:
    """Badges unlocked by going from `before` to `after` completed goals."""
    return [b for b in BADGES if before < b.threshold <= after]
