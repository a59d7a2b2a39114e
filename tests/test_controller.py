"""
Tests for the app controller lifecycle: cache follows identity changes.
"""

import pytest

from focodiario.core import controller as controller_module
from focodiario.core.config import FocoConfig
from focodiario.core.controller import AppController, build_controller
from focodiario.core.exceptions import ConfigError
from focodiario.core.session import STATE_ANONYMOUS, STATE_AUTHENTICATED


def test_start_without_stored_session(controller, backend):
    assert controller.start() == STATE_ANONYMOUS
    assert controller.cache.goals == []
    assert backend.rest_calls() == []


def test_login_loads_goals_once(backend, controller):
    user_id = backend.add_user("ana", "secret1", display_name="ana")
    backend.add_row(user_id, "Run", "Saúde")
    controller.start()

    controller.authenticate("ana", "secret1")

    assert [g.title for g in controller.cache.goals] == ["Run"]
    assert len(backend.calls_to("GET", "/rest/v1/goals")) == 1


def test_logout_clears_cache(ana):
    ana.cache.create("Run", "Saúde")

    assert ana.logout(lambda: True) is True

    assert ana.session.state == STATE_ANONYMOUS
    assert ana.cache.goals == []


def test_switching_user_resets_cache(backend, ana):
    ana.cache.create("Ana's goal", "Pessoal")
    ana.logout(lambda: True)

    ana.authenticate("bia", "secret2")

    assert ana.session.user.email == "bia@focodiario.com"
    assert ana.cache.goals == []


def test_next_run_resumes_stored_session(backend, config, ana):
    import httpx

    ana.cache.create("Run", "Saúde")

    with AppController.from_config(config, transport=httpx.MockTransport(backend.handle)) as later:
        assert later.start() == STATE_AUTHENTICATED
        assert [g.title for g in later.cache.goals] == ["Run"]


def test_remote_expiry_clears_cache(backend, ana):
    ana.cache.create("Run", "Saúde")
    backend.revoked.add(ana.session.session.access_token)
    backend.fail("POST", "/auth/v1/token", status=400)

    ana.refresh()

    assert ana.session.state == STATE_ANONYMOUS
    assert ana.cache.goals == []


def test_close_is_idempotent(controller):
    controller.start()
    controller.close()
    controller.close()


def test_build_controller_requires_backend(tmp_path, monkeypatch):
    monkeypatch.setattr(controller_module, "configure_logging", lambda config: None)
    with pytest.raises(ConfigError):
        build_controller(FocoConfig(data_dir=str(tmp_path)))
