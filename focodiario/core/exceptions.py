"""
FILE: focodiario/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - FocoError (base exception)
  - InvalidInputError
  - NotAuthenticatedError
  - AuthenticationError / InvalidCredentialsError
  - RemoteError
  - GoalBusyError
  - GoalNotFoundError
  - ConfigError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from FocoError for easy catching
  - Core layer raises these, UI layers catch and display
"""

from typing import Optional


class FocoError(Exception):
    """Base exception for all FocoDiário errors."""
    pass


class InvalidInputError(FocoError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)


class NotAuthenticatedError(FocoError):
    """An operation needs an active session and there is none."""

    def __init__(self, message: str = "Not logged in"):
        super().__init__(message)


class AuthenticationError(FocoError):
    """Sign-in or sign-up was refused by the identity provider."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """The identity provider did not recognise the email/password pair."""
    pass


class RemoteError(FocoError):
    """A request to the backend failed (network, HTTP or payload error)."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class GoalBusyError(FocoError):
    """Another mutation on the same goal is still outstanding."""

    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__(f"Goal {goal_id} has a pending change, try again")


class GoalNotFoundError(FocoError):
    """No goal matches the reference typed by the user."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Goal {ref} not found")


class ConfigError(FocoError):
    """Configuration is missing or malformed."""

    def __init__(self, message: str):
        super().__init__(message)
