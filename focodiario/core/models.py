"""
FILE: focodiario/core/models.py
PURPOSE: Domain models for goals, users, sessions, categories and badges
EXPORTS:
  - Goal (dataclass)
  - User (dataclass)
  - Session (dataclass)
  - Category (frozen dataclass)
  - Badge (frozen dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - json (stdlib)
  - time, datetime (stdlib)
NOTES:
  - Goal.from_row() converts a PostgREST row
  - Session.from_payload() converts a GoTrue token response
  - Timestamps from the backend are ISO-8601 strings
"""

import json
import re
import time
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Seconds before expiry at which a session is treated as expired
EXPIRY_MARGIN_SECONDS = 30

# Postgres trims trailing zeros from fractional seconds
_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse an ISO-8601 timestamp from the backend into an aware datetime.

    Fractions of any length are accepted; they are padded or cut to
    microseconds before parsing.

    Raises:
        ValueError: If the value is not an ISO-8601 timestamp
    """
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    text = value.replace("Z", "+00:00")
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass
class Goal:
    """A goal with a title, a category and a completion flag."""

    id: str
    title: str
    category: str
    completed: bool = False
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Goal":
        """Convert a row of the remote goals table to a Goal."""
        return cls(
            id=str(row["id"]),
            title=row["title"],
            category=row["category"],
            completed=bool(row.get("completed", False)),
            created_at=row.get("created_at"),
        )

    @property
    def created_datetime(self) -> datetime:
        return parse_timestamp(self.created_at)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        """Serialize goal to JSON string."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


@dataclass
class User:
    """The authenticated principal behind a session."""

    id: str
    email: str
    display_name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "User":
        metadata = payload.get("user_metadata") or {}
        return cls(
            id=str(payload["id"]),
            email=payload.get("email") or "",
            display_name=metadata.get("display_name"),
        )

    @property
    def name(self) -> str:
        """Display name, or the local part of the email when none was set."""
        if self.display_name:
            return self.display_name
        return self.email.split("@")[0]

    def to_payload(self) -> Dict[str, Any]:
        metadata = {}
        if self.display_name:
            metadata["display_name"] = self.display_name
        return {"id": self.id, "email": self.email, "user_metadata": metadata}


@dataclass
class Session:
    """Tokens issued by the identity provider plus the user they belong to."""

    access_token: str
    refresh_token: str
    user: User
    expires_at: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Session":
        """
        Build a session from a GoTrue token response.

        Computes expires_at from expires_in when the response omits it.
        """
        expires_at = payload.get("expires_at")
        if expires_at is None and payload.get("expires_in") is not None:
            expires_at = int(time.time()) + int(payload["expires_in"])
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token") or "",
            user=User.from_payload(payload["user"]),
            expires_at=int(expires_at) if expires_at is not None else None,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
            "user": self.user.to_payload(),
        }

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        current = time.time() if now is None else now
        return current >= self.expires_at - EXPIRY_MARGIN_SECONDS


@dataclass(frozen=True)
class Category:
    """A goal category with its display colour and icon."""

    name: str
    color: str
    icon: str


@dataclass(frozen=True)
class Badge:
    """An achievement unlocked by completing a number of goals."""

    name: str
    threshold: int
    icon: str
    color: str
    description: str = field(default="", compare=False)
