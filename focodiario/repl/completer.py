"""
FILE: focodiario/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - FocoCompleter (Completer for command/arg completion)
  - create_completer(ctx) -> FocoCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
NOTES:
  - Suggests command names at the start of the line
  - Suggests tab names after "tab"
  - Suggests categories after --category
  - Suggests goal numbers (with titles) after toggle/done/rm when a
    context is available
  - Case-insensitive matching
"""

from typing import Iterable, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.constants import CATEGORY_NAMES, TAB_ALIASES, VALID_TABS


class FocoCompleter(Completer):
    """Context-aware completion for the FocoDiário REPL."""

    COMMANDS = [
        "new", "add", "ls", "toggle", "done", "rm", "cancel", "refresh",
        "goals", "history", "achievements", "settings",
        "metas", "historico", "conquistas", "ajustes",
        "tab", "whoami", "logout", "help", "clear", "exit", "quit",
    ]

    TAB_NAMES = list(VALID_TABS) + [alias for alias in TAB_ALIASES if alias.isascii()]

    COMMAND_FLAGS = {
        "add": ["--category"],
    }

    GOAL_REF_COMMANDS = {"toggle", "done", "rm"}

    def __init__(self, ctx=None):
        self._ctx = ctx

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()
        at_new_word = text_before_cursor.endswith(" ")

        # Command name
        if not words or (not at_new_word and len(words) == 1):
            yield from self._complete_from(words[0] if words else "", self.COMMANDS)
            return

        command = words[0].lower()
        current = "" if at_new_word else words[-1]
        previous = words[-1] if at_new_word else (words[-2] if len(words) > 1 else "")

        # Value for --category
        if previous == "--category":
            yield from self._complete_from(current, list(CATEGORY_NAMES))
            return

        # Flags
        if current.startswith("--"):
            yield from self._complete_from(current, self.COMMAND_FLAGS.get(command, []))
            return

        # Tab names
        if command == "tab" and len(words) - (0 if at_new_word else 1) == 1:
            yield from self._complete_from(current, self.TAB_NAMES)
            return

        # Goal numbers
        if command in self.GOAL_REF_COMMANDS and len(words) - (0 if at_new_word else 1) == 1:
            yield from self._complete_goal_numbers(current)

    def _complete_from(self, word: str, options) -> Iterable[Completion]:
        word_lower = word.lower()
        for option in options:
            if option.lower().startswith(word_lower):
                yield Completion(option, start_position=-len(word))

    def _complete_goal_numbers(self, word: str) -> Iterable[Completion]:
        if self._ctx is None:
            return
        for position, goal in enumerate(self._ctx.goals, 1):
            text = str(position)
            if text.startswith(word):
                title = goal.title if len(goal.title) <= 40 else goal.title[:37] + "..."
                yield Completion(text, start_position=-len(word), display_meta=title)


def create_completer(ctx: Optional[object] = None) -> FocoCompleter:
    """Create the REPL completer, optionally bound to a REPLContext for goal numbers."""
    return FocoCompleter(ctx)
