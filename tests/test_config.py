"""
Tests for configuration loading and file logging.
"""

import json
import logging

import pytest

from focodiario.core import log
from focodiario.core.config import FocoConfig, load_config
from focodiario.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "FOCODIARIO_CONFIG",
        "FOCODIARIO_SUPABASE_URL",
        "FOCODIARIO_SUPABASE_KEY",
        "FOCODIARIO_DATA_DIR",
        "FOCODIARIO_LOG_LEVEL",
        "FOCODIARIO_REQUEST_TIMEOUT_S",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path / "missing.json")
    assert config.supabase_url == ""
    assert config.request_timeout_s == 30.0
    assert config.log_level == "WARNING"


def test_file_then_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"supabase_url": "https://x.supabase.co/", "supabase_key": "k", "log_level": "info"}),
        encoding="utf-8",
    )
    monkeypatch.setenv("FOCODIARIO_SUPABASE_KEY", "from-env")
    monkeypatch.setenv("FOCODIARIO_REQUEST_TIMEOUT_S", "5")

    config = load_config(path)
    assert config.supabase_url == "https://x.supabase.co"
    assert config.supabase_key == "from-env"
    assert config.log_level == "INFO"
    assert config.request_timeout_s == 5.0


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "alt.json"
    path.write_text(json.dumps({"data_dir": str(tmp_path / "d")}), encoding="utf-8")
    monkeypatch.setenv("FOCODIARIO_CONFIG", str(path))

    config = load_config()
    assert config.session_path == tmp_path / "d" / "session.json"
    assert config.log_path == tmp_path / "d" / "focodiario.log"


def test_invalid_config_file(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)

    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)


def test_invalid_timeout(tmp_path, monkeypatch):
    monkeypatch.setenv("FOCODIARIO_REQUEST_TIMEOUT_S", "soon")
    with pytest.raises(ConfigError, match="request_timeout_s"):
        load_config(tmp_path / "missing.json")


def test_require_backend_names_missing_settings():
    with pytest.raises(ConfigError) as exc_info:
        FocoConfig(supabase_url="https://x.supabase.co").require_backend()
    assert "FOCODIARIO_SUPABASE_KEY" in str(exc_info.value)
    assert "FOCODIARIO_SUPABASE_URL" not in str(exc_info.value)


def test_configure_logging_writes_to_data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(log, "_handler", None)
    package_logger = logging.getLogger("focodiario")
    config = FocoConfig(data_dir=str(tmp_path), log_level="INFO")

    path = log.configure_logging(config)
    try:
        assert path == tmp_path / "focodiario.log"
        assert log.configure_logging(config) == path
        assert len([h for h in package_logger.handlers if h is log._handler]) == 1

        logging.getLogger("focodiario.core.cache").info("hello log")
        log._handler.flush()
        assert "hello log" in path.read_text(encoding="utf-8")
    finally:
        package_logger.removeHandler(log._handler)
        log._handler.close()
        package_logger.propagate = True
