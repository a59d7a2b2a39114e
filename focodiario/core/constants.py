"""
FILE: focodiario/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - CATEGORIES / CATEGORY_NAMES / DEFAULT_CATEGORY
  - TAB_* values, VALID_TABS, TAB_ALIASES, DEFAULT_TAB
  - BADGES
  - GOALS_TABLE, EMAIL_DOMAIN
NOTES:
  - Single source of truth for categories, tabs and badge thresholds
  - Categories are fixed at build time, never user-extensible
"""

from .models import Category, Badge

# Remote collection holding goals, and the column scoping rows to a user
GOALS_TABLE = "goals"
OWNER_COLUMN = "user_id"

# Domain used to build the email-shaped identifier from a username
EMAIL_DOMAIN = "focodiario.com"

# Goal categories (order is the display order)
CATEGORY_HEALTH = "Saúde"
CATEGORY_WORK = "Trabalho"
CATEGORY_PERSONAL = "Pessoal"
CATEGORY_STUDIES = "Estudos"
CATEGORY_FINANCES = "Finanças"

CATEGORIES = (
    Category(CATEGORY_HEALTH, "bold red", "❤"),
    Category(CATEGORY_WORK, "bold blue", "💼"),
    Category(CATEGORY_PERSONAL, "bold magenta", "👤"),
    Category(CATEGORY_STUDIES, "bold yellow", "📖"),
    Category(CATEGORY_FINANCES, "bold green", "💳"),
)
CATEGORY_NAMES = tuple(c.name for c in CATEGORIES)
DEFAULT_CATEGORY = CATEGORY_PERSONAL

# View tabs
TAB_GOALS = "goals"
TAB_HISTORY = "history"
TAB_ACHIEVEMENTS = "achievements"
TAB_SETTINGS = "settings"
VALID_TABS = (TAB_GOALS, TAB_HISTORY, TAB_ACHIEVEMENTS, TAB_SETTINGS)
DEFAULT_TAB = TAB_GOALS

# Portuguese tab names accepted as aliases
TAB_ALIASES = {
    "metas": TAB_GOALS,
    "historico": TAB_HISTORY,
    "histórico": TAB_HISTORY,
    "conquistas": TAB_ACHIEVEMENTS,
    "ajustes": TAB_SETTINGS,
}

# Achievement badges, unlocked by completed-goal count
BADGES = (
    Badge("Iniciante", 1, "🏅", "yellow", "Complete your first goal"),
    Badge("Constante", 5, "⭐", "blue", "Complete five goals"),
)
