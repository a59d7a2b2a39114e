"""
FILE: focodiario/repl/__init__.py
PURPOSE: REPL package for interactive daily goals
EXPORTS:
  - main() (from repl.main)
DEPENDENCIES:
  - prompt_toolkit (REPL interface)
  - rich (formatted output)
  - focodiario.core.controller (session + goal cache)
NOTES:
  - Entry point for interactive mode
  - Provides autocomplete and command history
"""

from .main import main

__all__ = ["main"]
