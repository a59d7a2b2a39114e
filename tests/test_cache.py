"""
Tests for the local goal cache: remote-first mutations and ordering.
"""

import pytest

from focodiario.core.cache import GoalCache
from focodiario.core.exceptions import (
    GoalBusyError,
    InvalidInputError,
    NotAuthenticatedError,
    RemoteError,
)
from focodiario.core.models import Goal


def test_load_orders_newest_first(backend, ana):
    user_id = ana.session.user.id
    backend.add_row(user_id, "First")
    backend.add_row(user_id, "Second")

    goals = ana.cache.load()

    assert [g.title for g in goals] == ["Second", "First"]


def test_creates_keep_descending_order(ana):
    for title in ("Run", "Read", "Save", "Call mom"):
        ana.cache.create(title, "Pessoal")

    goals = ana.cache.goals
    assert [g.title for g in goals] == ["Call mom", "Save", "Read", "Run"]
    stamps = [g.created_datetime for g in goals]
    assert stamps == sorted(stamps, reverse=True)


def test_create_scenario_prepends_server_goal(backend, ana):
    backend.add_row(ana.session.user.id, "Run", "Saúde")
    ana.refresh()
    assert [g.title for g in ana.cache.goals] == ["Run"]

    created = ana.cache.create("Read", "Estudos")

    goals = ana.cache.goals
    assert goals[0] == created
    assert (goals[0].title, goals[0].category, goals[0].completed) == ("Read", "Estudos", False)
    assert goals[1].title == "Run"
    assert goals[0].created_datetime > goals[1].created_datetime


def test_create_trims_title(backend, ana):
    goal = ana.cache.create("  Read  ", "Estudos")
    assert goal.title == "Read"
    assert backend.rest_calls()[-1][3][0]["title"] == "Read"


@pytest.mark.parametrize("title", ["", "   ", "\t"])
def test_create_empty_title_makes_no_remote_call(backend, ana, title):
    calls_before = len(backend.rest_calls())
    length_before = len(ana.cache)

    with pytest.raises(InvalidInputError):
        ana.cache.create(title, "Saúde")

    assert len(backend.rest_calls()) == calls_before
    assert len(ana.cache) == length_before


def test_create_unknown_category_rejected(backend, ana):
    with pytest.raises(InvalidInputError, match="Invalid category"):
        ana.cache.create("Run", "Lazer")
    assert backend.calls_to("POST", "/rest/v1/goals") == []


def test_create_without_session_makes_no_remote_call(backend, repository):
    cache = GoalCache(repository, lambda: None)
    with pytest.raises(NotAuthenticatedError):
        cache.create("Run", "Saúde")
    assert backend.rest_calls() == []
    assert len(cache) == 0


def test_failed_create_leaves_cache_unchanged(backend, ana):
    ana.cache.create("Run", "Saúde")
    backend.fail("POST", "/rest/v1/goals", status=500)

    with pytest.raises(RemoteError):
        ana.cache.create("Read", "Estudos")

    assert [g.title for g in ana.cache.goals] == ["Run"]


def test_toggle_twice_restores_value_and_position(ana):
    ana.cache.create("Run", "Saúde")
    target = ana.cache.create("Read", "Estudos")
    ana.cache.create("Save", "Finanças")
    order = [g.id for g in ana.cache.goals]

    first = ana.cache.toggle(target.id)
    assert first.completed is True
    assert [g.id for g in ana.cache.goals] == order

    second = ana.cache.toggle(target.id)
    assert second.completed is False
    assert [g.id for g in ana.cache.goals] == order


def test_failed_toggle_leaves_cache_unchanged(backend, ana):
    goal = ana.cache.create("Run", "Saúde")
    backend.fail("PATCH", "/rest/v1/goals", status=500)

    with pytest.raises(RemoteError):
        ana.cache.toggle(goal.id)

    assert ana.cache.get(goal.id).completed is False
    assert not ana.cache.is_pending(goal.id)


def test_toggle_and_delete_absent_id_are_noops(backend, ana):
    ana.cache.create("Run", "Saúde")
    before = ana.cache.goals
    calls_before = len(backend.rest_calls())

    assert ana.cache.toggle("missing") is None
    assert ana.cache.delete("missing") is False

    assert ana.cache.goals == before
    assert len(backend.rest_calls()) == calls_before


def test_delete_removes_after_remote_success(backend, ana):
    goal = ana.cache.create("Run", "Saúde")
    assert ana.cache.delete(goal.id) is True
    assert ana.cache.goals == []
    assert backend.rows == []


def test_failed_delete_leaves_cache_unchanged(backend, ana):
    goal = ana.cache.create("Run", "Saúde")
    backend.fail("DELETE", "/rest/v1/goals", status=503)

    with pytest.raises(RemoteError):
        ana.cache.delete(goal.id)

    assert [g.id for g in ana.cache.goals] == [goal.id]


def test_failed_load_keeps_previous_contents(backend, ana):
    ana.cache.create("Run", "Saúde")
    backend.fail("GET", "/rest/v1/goals", status=500)

    goals = ana.cache.load()

    assert [g.title for g in goals] == ["Run"]


def test_load_accepts_postgres_fractional_seconds(backend, ana):
    """Postgres drops trailing zeros, leaving fractions of any length."""
    user_id = ana.session.user.id
    backend.add_row(user_id, "Early")["created_at"] = "2024-01-01T08:00:00.12345+00:00"
    backend.add_row(user_id, "Late")["created_at"] = "2024-01-01T09:00:00.5+00:00"
    backend.add_row(user_id, "Middle")["created_at"] = "2024-01-01T08:30:00+00:00"

    goals = ana.cache.load()

    assert [g.title for g in goals] == ["Late", "Middle", "Early"]
    print("✓ Short and long fractional seconds sort correctly")


@pytest.mark.parametrize("field, value", [("title", None), ("created_at", "yesterday")])
def test_malformed_row_keeps_previous_contents(backend, ana, field, value):
    ana.cache.create("Run", "Saúde")
    row = backend.add_row(ana.session.user.id, "Broken")
    if value is None:
        del row[field]
    else:
        row[field] = value

    goals = ana.cache.load()

    assert [g.title for g in goals] == ["Run"]


def test_second_mutation_on_same_goal_is_rejected():
    goal = Goal("g1", "Run", "Saúde")
    attempts = []

    class ReentrantRepository:
        def update_goal_completed(self, goal_id, completed):
            # A second mutation arrives while the first is still in flight
            try:
                cache.delete(goal_id)
            except GoalBusyError as e:
                attempts.append(e)

        def delete_goal(self, goal_id):
            raise AssertionError("delete must not reach the backend")

        def list_goals(self, user_id):
            return [goal]

    session = object()
    cache = GoalCache(ReentrantRepository(), lambda: session)
    cache._goals = [goal]

    updated = cache.toggle("g1")

    assert updated.completed is True
    assert len(attempts) == 1
    assert attempts[0].goal_id == "g1"
    assert not cache.is_pending("g1")
