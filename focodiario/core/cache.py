"""
FILE: focodiario/core/cache.py
PURPOSE: In-memory mirror of the signed-in user's goals
EXPORTS:
  - GoalCache
      .load() -> List[Goal]
      .create(title, category) -> Goal
      .toggle(goal_id) -> Optional[Goal]
      .delete(goal_id) -> bool
      .clear() -> None
DEPENDENCIES:
  - focodiario.core.repository (remote goals table)
  - focodiario.core.models (Goal, Session)
NOTES:
  - Every mutation is remote-first: the local list only changes after the
    backend confirmed the change, so it never holds an optimistic guess
  - Order is created_at descending; toggling never reorders
  - A goal with a mutation in flight rejects further mutations (GoalBusyError)
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, Iterator, List, Optional, Set

from .constants import CATEGORY_NAMES
from .exceptions import (
    FocoError,
    GoalBusyError,
    InvalidInputError,
    NotAuthenticatedError,
)
from .models import Goal, Session
from .repository import GoalRepository

logger = logging.getLogger(__name__)


class GoalCache:
    """Ordered list of goals for the active session, kept in step with the backend."""

    def __init__(
        self,
        repository: GoalRepository,
        session_provider: Callable[[], Optional[Session]],
    ):
        self._repository = repository
        self._session_provider = session_provider
        self._goals: List[Goal] = []
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    # --- Reads ---

    @property
    def goals(self) -> List[Goal]:
        return list(self._goals)

    def __len__(self) -> int:
        return len(self._goals)

    def get(self, goal_id: str) -> Optional[Goal]:
        for goal in self._goals:
            if goal.id == goal_id:
                return goal
        return None

    def completed(self) -> List[Goal]:
        return [g for g in self._goals if g.completed]

    def is_pending(self, goal_id: str) -> bool:
        return goal_id in self._in_flight

    # --- Remote operations ---

    def load(self) -> List[Goal]:
        """
        Replace the cache with the active user's goals, newest first.

        Without a session, or when the fetch fails, the current contents
        are kept and returned unchanged.
        """
        session = self._session_provider()
        if session is None:
            return self.goals

        try:
            goals = self._repository.list_goals(session.user.id)
            ordered = sorted(goals, key=lambda g: g.created_datetime, reverse=True)
        except (FocoError, ValueError) as e:
            logger.warning("Could not load goals: %s", e)
            return self.goals

        self._goals = ordered
        logger.info("Loaded %d goal(s)", len(self._goals))
        return self.goals

    def create(self, title: str, category: str) -> Goal:
        """
        Create a goal remotely and prepend it to the cache.

        Args:
            title: Goal title (trimmed, must not be empty)
            category: One of the category names

        Returns:
            The goal as stored by the backend

        Raises:
            InvalidInputError: Empty title or unknown category (no remote call)
            NotAuthenticatedError: No active session (no remote call)
            RemoteError: Backend refused or could not be reached
        """
        title = title.strip()
        if not title:
            raise InvalidInputError("Goal title cannot be empty")

        if category not in CATEGORY_NAMES:
            raise InvalidInputError(
                f"Invalid category '{category}'. Must be one of: {', '.join(CATEGORY_NAMES)}"
            )

        session = self._session_provider()
        if session is None:
            raise NotAuthenticatedError()

        goal = self._repository.create_goal(title, category, session.user.id)
        self._goals.insert(0, goal)
        logger.info("Created goal %s", goal.id)
        return goal

    def toggle(self, goal_id: str) -> Optional[Goal]:
        """
        Flip a goal's completed flag.

        Returns:
            The updated goal, or None if goal_id is not in the cache
        """
        goal = self.get(goal_id)
        if goal is None:
            return None

        with self._claim(goal_id):
            self._repository.update_goal_completed(goal_id, not goal.completed)

            # Look the goal up again: the list may have been replaced meanwhile
            index = self._index_of(goal_id)
            if index is None:
                return None
            updated = replace(self._goals[index], completed=not goal.completed)
            self._goals[index] = updated

        logger.info("Toggled goal %s to completed=%s", goal_id, updated.completed)
        return updated

    def delete(self, goal_id: str) -> bool:
        """
        Delete a goal remotely, then drop it from the cache.

        Returns:
            True if a goal was deleted, False if goal_id is not in the cache
        """
        if self.get(goal_id) is None:
            return False

        with self._claim(goal_id):
            self._repository.delete_goal(goal_id)
            self._goals = [g for g in self._goals if g.id != goal_id]

        logger.info("Deleted goal %s", goal_id)
        return True

    def clear(self) -> None:
        self._goals = []

    # --- Internals ---

    def _index_of(self, goal_id: str) -> Optional[int]:
        for index, goal in enumerate(self._goals):
            if goal.id == goal_id:
                return index
        return None

    @contextmanager
    def _claim(self, goal_id: str) -> Iterator[None]:
        with self._lock:
            if goal_id in self._in_flight:
                raise GoalBusyError(goal_id)
            self._in_flight.add(goal_id)
        try:
            yield
        finally:
            with self._lock:
                self._in_flight.discard(goal_id)
