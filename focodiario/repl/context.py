"""
FILE: focodiario/repl/context.py
PURPOSE: Per-run REPL state passed to every command handler
EXPORTS:
  - REPLContext (dataclass)
  - resolve_tab(name) -> str
NOTES:
  - Holds the app controller, the active tab and the creation form
  - read_line/read_secret are injected so prompts work with or without a TTY
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..core.constants import DEFAULT_TAB, TAB_ALIASES, VALID_TABS
from ..core.controller import AppController
from ..core.exceptions import InvalidInputError
from ..core.models import Goal, User
from .form import GoalForm


def _simple_read_line(message: str, default: str = "") -> str:
    if default:
        message = f"{message}[{default}] "
    value = input(message)
    return value if value else default


def _simple_read_secret(message: str) -> str:
    return input(message)


def resolve_tab(name: str) -> str:
    """
    Map a tab name or its Portuguese alias to a tab value.

    Raises:
        InvalidInputError: If the name is not a tab
    """
    key = name.strip().lower()
    if key in VALID_TABS:
        return key
    if key in TAB_ALIASES:
        return TAB_ALIASES[key]
    raise InvalidInputError(
        f"Invalid tab '{name}'. Must be one of: {', '.join(VALID_TABS)}"
    )


@dataclass
class REPLContext:
    """
    State for one REPL run.

    Attributes:
        controller: Owns the session and the goal cache
        active_tab: Which of the four views is shown
        form: Creation form overlay state
        read_line: Prompt for a line, with an optional default value
        read_secret: Prompt for a line without echo
    """
    controller: AppController
    active_tab: str = DEFAULT_TAB
    form: GoalForm = field(default_factory=GoalForm)
    read_line: Callable[..., str] = _simple_read_line
    read_secret: Callable[[str], str] = _simple_read_secret

    @property
    def goals(self) -> List[Goal]:
        return self.controller.cache.goals

    @property
    def user(self) -> Optional[User]:
        return self.controller.session.user

    def set_tab(self, name: str) -> str:
        self.active_tab = resolve_tab(name)
        return self.active_tab

    def get_prompt(self) -> str:
        """
        Generate prompt string based on current context.

        Returns:
            "foco> ", "foco:[history]> ", or "foco:[history | new]> " while
            the creation form holds input
        """
        parts = []
        if self.active_tab != DEFAULT_TAB:
            parts.append(self.active_tab)
        if self.form.visible:
            parts.append("new")

        if parts:
            return f"foco:[{' | '.join(parts)}]> "
        return "foco> "
