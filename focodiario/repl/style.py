"""
FILE: focodiario/repl/style.py
PURPOSE: Small celebration messages for REPL feedback
EXPORTS:
  - celebrate_done() -> str
  - celebrate_add() -> str
  - celebrate_delete() -> str
  - celebrate_badge(badge) -> str
NOTES:
  - Subtle, one line, never a full-screen effect
"""

import random

from ..core.models import Badge


DONE_CELEBRATIONS = [
    "✨ *sparkle* ✨",
    "🎉 *pop* 🎉",
    "⭐ *shine* ⭐",
    "💫 *twinkle* 💫",
]

ADD_CELEBRATIONS = [
    "✓ *noted* ✓",
    "📝 *captured* 📝",
    "🎯 *aimed* 🎯",
]

DELETE_ANIMATIONS = [
    "💨 *poof* 💨",
    "× *removed* ×",
    "∅ *gone* ∅",
]


def celebrate_done() -> str:
    return random.choice(DONE_CELEBRATIONS)


def celebrate_add() -> str:
    return random.choice(ADD_CELEBRATIONS)


def celebrate_delete() -> str:
    return random.choice(DELETE_ANIMATIONS)


def celebrate_badge(badge: Badge) -> str:
    """
    Message for a newly unlocked badge.

    Example:
        "🏅 Badge unlocked: Iniciante!"
    """
    return f"{badge.icon} Badge unlocked: [bold {badge.color}]{badge.name}[/bold {badge.color}]!"
