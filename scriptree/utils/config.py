"""Configuration loading utilities."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from .. import __version__
from ..constants import ScriptType
from ..exceptions import ConfigError
from ..interfaces.config import AppConfig
from .paths import home_dir

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load application configuration from ``config.yml``.

    Args:
        path: Optional path override. Defaults to ``<home>/config.yml``.

    Returns:
        A :class:`~scriptree.interfaces.config.AppConfig` populated from YAML,
        or the defaults when the file does not exist yet.
    """

    home = Path(path).parent if path else home_dir()
    config_path = Path(path) if path else home / "config.yml"
    if not config_path.exists():
        logger.debug("No config file at %s; using defaults", config_path)
        return AppConfig(version=__version__, home=home)

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(str(config_path), f"config file could not be read ({exc})") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError(str(config_path), "config file must be a mapping of key: value pairs")

    config = AppConfig(version=__version__, home=home)
    for key, value in raw.items():
        if key not in AppConfig.settable_keys():
            logger.warning("Ignoring unknown config key '%s' in %s", key, config_path)
            continue
        config = set_config_value(config, key, value)
    return config


def save_config(config: AppConfig) -> Path:
    """Write the settable fields of ``config`` back to its ``config.yml``."""

    config.home.mkdir(parents=True, exist_ok=True)
    with config.config_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config.to_dict(), handle, sort_keys=False)
    return config.config_path


def set_config_value(config: AppConfig, key: str, raw: Any) -> AppConfig:
    """Return a copy of ``config`` with ``key`` set to the coerced ``raw`` value."""

    if key not in AppConfig.settable_keys():
        allowed = ", ".join(AppConfig.settable_keys())
        raise ConfigError(key, f"unknown key (expected one of: {allowed})")

    current = getattr(config, key)
    if isinstance(current, bool):
        value: Any = _coerce_bool(key, raw)
    else:
        value = str(raw).strip()
        if not value:
            raise ConfigError(key, "value cannot be empty")

    if key == "default_script_type":
        types = {item.value for item in ScriptType}
        if value not in types:
            raise ConfigError(key, f"'{value}' is not one of {', '.join(sorted(types))}")
    return dataclasses.replace(config, **{key: value})


def _coerce_bool(key: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    word = str(raw).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigError(key, f"'{raw}' is not a boolean")
