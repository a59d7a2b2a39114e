"""
FILE: focodiario/repl/commands/__init__.py
PURPOSE: REPL command handler modules
"""

from .goals import (
    handle_new_command,
    handle_add_command,
    handle_toggle_command,
    handle_rm_command,
    handle_cancel_command,
    handle_refresh_command,
    handle_ls_command,
)
from .views import (
    handle_tab_command,
    make_tab_handler,
)
from .system import (
    handle_help_command,
    handle_clear_command,
    handle_whoami_command,
    handle_logout_command,
)

__all__ = [
    "handle_new_command",
    "handle_add_command",
    "handle_toggle_command",
    "handle_rm_command",
    "handle_cancel_command",
    "handle_refresh_command",
    "handle_ls_command",
    "handle_tab_command",
    "make_tab_handler",
    "handle_help_command",
    "handle_clear_command",
    "handle_whoami_command",
    "handle_logout_command",
]
