"""
FILE: focodiario/repl/form.py
PURPOSE: State of the goal creation form shown by the REPL 'new' command
EXPORTS:
  - GoalForm (dataclass)
NOTES:
  - Fields survive a failed submit so the next 'new' starts prefilled
  - Cleared on successful submit or explicit dismissal
  - Not part of the tab state: opening the form never changes the active tab
"""

from dataclasses import dataclass

from ..core.cache import GoalCache
from ..core.constants import DEFAULT_CATEGORY
from ..core.models import Goal


@dataclass
class GoalForm:
    """In-progress input of the creation form."""

    title: str = ""
    category: str = DEFAULT_CATEGORY
    visible: bool = False

    def open(self) -> None:
        self.visible = True

    def dismiss(self) -> None:
        self.title = ""
        self.category = DEFAULT_CATEGORY
        self.visible = False

    def submit(self, cache: GoalCache) -> Goal:
        """
        Create the goal from the current fields.

        On success the form is cleared and closed. On any error the fields
        are left as they were and the error propagates.
        """
        goal = cache.create(self.title, self.category)
        self.dismiss()
        return goal
