"""
FILE: focodiario/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .goals import (
    add,
    ls,
    toggle,
    rm,
    categories,
)
from .views import (
    history,
    achievements,
)
from .account import (
    login,
    logout,
    whoami,
)
from .system import (
    version,
    help,
    repl,
)

__all__ = [
    "add",
    "ls",
    "toggle",
    "rm",
    "categories",
    "history",
    "achievements",
    "login",
    "logout",
    "whoami",
    "version",
    "help",
    "repl",
]
