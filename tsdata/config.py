"""Settings for the tsdata command line tool."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from tsdata.core import TsdataError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

ENV_PREFIX = "TSDATA_"


class ConfigError(TsdataError):
    """Raised when a settings file or environment override is malformed."""


@dataclass
class Settings:
    stringent: bool = False
    quiet: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Setting '{name}' must be a boolean (got {value!r})")


def _coerce(name: str, value: Any) -> Any:
    if name == "log_level":
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Setting 'log_level' must be a non-empty string (got {value!r})")
        return value.strip().upper()
    return _coerce_bool(name, value)


def settings_from_mapping(data: Mapping[str, Any], base: Settings | None = None) -> Settings:
    """Apply `data` on top of `base` (defaults if None). Unknown keys are an error."""
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

    values = (base or Settings()).as_dict()
    for key, value in data.items():
        values[key] = _coerce(key, value)
    return Settings(**values)


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for f in fields(Settings):
        env_name = ENV_PREFIX + f.name.upper()
        if env_name in environ:
            overrides[f.name] = environ[env_name]
    return overrides


def load_settings(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Load settings from an optional YAML file, then apply TSDATA_* environment overrides."""
    settings = Settings()
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping/object")
        settings = settings_from_mapping(data, settings)

    env = os.environ if environ is None else environ
    return settings_from_mapping(_env_overrides(env), settings)
