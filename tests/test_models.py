"""
Tests for domain models and the username -> email adapter.
"""

import json
import time

import pytest

from focodiario.core.accounts import username_to_email
from focodiario.core.exceptions import InvalidInputError
from focodiario.core.models import Goal, Session, User, parse_timestamp


def test_username_to_email_normalizes():
    """Lowercase, whitespace removed, bound to the fixed domain."""
    assert username_to_email("ana") == "ana@focodiario.com"
    assert username_to_email("  Ana Maria ") == "anamaria@focodiario.com"
    assert username_to_email("JO\tAO") == "joao@focodiario.com"
    assert username_to_email("bob", domain="example.org") == "bob@example.org"
    print("✓ Username mapping is stable")


def test_username_to_email_rejects_blank():
    with pytest.raises(InvalidInputError):
        username_to_email("   ")


def test_goal_from_row():
    goal = Goal.from_row({
        "id": 7,
        "title": "Run",
        "category": "Saúde",
        "completed": None,
        "user_id": "user-1",
        "created_at": "2024-01-01T08:00:00Z",
    })
    assert goal.id == "7"
    assert goal.completed is False
    assert goal.created_datetime.year == 2024

    data = json.loads(goal.to_json())
    assert data["category"] == "Saúde"
    assert "user_id" not in data


def test_parse_timestamp_handles_missing_and_naive():
    assert parse_timestamp(None) < parse_timestamp("2000-01-01T00:00:00")
    assert parse_timestamp("2024-01-01T08:00:00").tzinfo is not None


def test_parse_timestamp_any_fraction_length():
    assert parse_timestamp("2024-01-01T09:00:00.5+00:00").microsecond == 500000
    assert parse_timestamp("2024-01-01T08:00:00.12345Z").microsecond == 123450
    assert parse_timestamp("2024-01-01T08:00:00.123456789+00:00").microsecond == 123456
    with pytest.raises(ValueError):
        parse_timestamp("yesterday")


def test_user_name_falls_back_to_email():
    assert User("u1", "ana@focodiario.com", "Ana").name == "Ana"
    assert User("u1", "ana@focodiario.com").name == "ana"


def test_session_payload_roundtrip_and_expiry():
    payload = {
        "access_token": "a",
        "refresh_token": "r",
        "expires_in": 3600,
        "user": {"id": "u1", "email": "ana@focodiario.com", "user_metadata": {"display_name": "ana"}},
    }
    session = Session.from_payload(payload)
    assert session.user.display_name == "ana"
    assert not session.is_expired()
    assert session.is_expired(now=time.time() + 3600)

    restored = Session.from_payload(session.to_payload())
    assert restored == session

    # No expiry information means the session never expires locally
    assert not Session("a", "r", session.user).is_expired()
