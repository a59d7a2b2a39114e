"""
FILE: focodiario/core/config.py
PURPOSE: Backend connection and local settings
EXPORTS:
  - FocoConfig (dataclass)
  - load_config(path) -> FocoConfig
  - read_config_file(path) -> dict
NOTES:
  - JSON file at ~/.config/focodiario/config.json (FOCODIARIO_CONFIG overrides)
  - FOCODIARIO_* environment variables win over the file
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path("~/.config/focodiario/config.json").expanduser()

CONFIG_ENV_OVERRIDES = {
    "supabase_url": "FOCODIARIO_SUPABASE_URL",
    "supabase_key": "FOCODIARIO_SUPABASE_KEY",
    "data_dir": "FOCODIARIO_DATA_DIR",
    "log_level": "FOCODIARIO_LOG_LEVEL",
    "request_timeout_s": "FOCODIARIO_REQUEST_TIMEOUT_S",
}


def get_config_path(path: Path | None = None) -> Path:
    candidate = path or Path(os.getenv("FOCODIARIO_CONFIG", DEFAULT_CONFIG_PATH))
    return candidate.expanduser()


def read_config_file(path: Path | None = None) -> dict[str, Any]:
    config_path = get_config_path(path)
    if not config_path.exists():
        return {}
    raw = config_path.read_text(encoding="utf-8")
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid config json in {config_path}") from exc
    if not isinstance(data, dict):
        raise ConfigError("config must be an object")
    return data


def get_env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, env_var in CONFIG_ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value is not None:
            overrides[key] = value
    return overrides


@dataclass
class FocoConfig:
    supabase_url: str = ""
    supabase_key: str = ""
    data_dir: str = "~/.focodiario"
    log_level: str = "WARNING"
    request_timeout_s: float = 30.0

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser()

    @property
    def session_path(self) -> Path:
        return self.data_path / "session.json"

    @property
    def log_path(self) -> Path:
        return self.data_path / "focodiario.log"

    def require_backend(self) -> None:
        """Raise ConfigError unless the backend endpoint and key are set."""
        missing = []
        if not self.supabase_url:
            missing.append(CONFIG_ENV_OVERRIDES["supabase_url"])
        if not self.supabase_key:
            missing.append(CONFIG_ENV_OVERRIDES["supabase_key"])
        if missing:
            raise ConfigError(
                "Backend not configured. Set "
                + " and ".join(missing)
                + f" or add them to {get_config_path()}"
            )


def _parse_float(value: object, default: float, *, key: str) -> float:
    if value is None:
        return default
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number") from exc


def load_config(path: Path | None = None) -> FocoConfig:
    """Load configuration from the config file, then apply env overrides."""
    data = read_config_file(path)
    data.update(get_env_overrides())
    defaults = FocoConfig()
    return FocoConfig(
        supabase_url=str(data.get("supabase_url") or defaults.supabase_url).rstrip("/"),
        supabase_key=str(data.get("supabase_key") or defaults.supabase_key),
        data_dir=str(data.get("data_dir") or defaults.data_dir),
        log_level=str(data.get("log_level") or defaults.log_level).upper(),
        request_timeout_s=_parse_float(
            data.get("request_timeout_s"), defaults.request_timeout_s, key="request_timeout_s"
        ),
    )
