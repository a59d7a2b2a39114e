"""
FILE: focodiario/core/accounts.py
PURPOSE: Map a plain username onto the email-shaped identifier the identity provider requires
EXPORTS:
  - username_to_email(username, domain) -> str
NOTES:
  - The provider only accepts email/password credentials; users only ever
    type a username. This is the single place where the two meet.
  - Mapping is lowercase, all whitespace removed, bound to EMAIL_DOMAIN,
    so "Ana Maria" and "anamaria" are the same account.
"""

import re

from .constants import EMAIL_DOMAIN
from .exceptions import InvalidInputError

_WHITESPACE = re.compile(r"\s+")


def username_to_email(username: str, domain: str = EMAIL_DOMAIN) -> str:
    """
    Derive the synthetic email for a username.

    Raises:
        InvalidInputError: If nothing is left of the username after stripping
    """
    local_part = _WHITESPACE.sub("", username.strip().lower())
    if not local_part:
        raise InvalidInputError("Username cannot be empty")
    return f"{local_part}@{domain}"
