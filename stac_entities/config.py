"""Configuration management for stac-entities.

Settings are resolved with the following precedence (highest to lowest):
1. Explicit argument
2. Environment variable (STAC_ENTITIES_<KEY>)
3. Config file (YAML)
4. Built-in default

The config file is only read when a path is given, either explicitly or via
the STAC_ENTITIES_CONFIG environment variable. Without one, resolution never
touches the filesystem.

Usage:
    from stac_entities.config import get_setting, load_config

    # Role weights used when ranking GeoTIFF assets
    scores = get_setting("geotiff_role_scores")

    # Explicit values always win
    migrate = get_setting("migrate", value=True)

Entity queries use ``get_resolved_setting`` instead, which validates the value,
never raises and reads the config file only once.
"""

from __future__ import annotations

import copy
import logging
import math
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from stac_entities.errors import ConfigError

logger = logging.getLogger(__name__)

# Built-in defaults for all known settings
DEFAULTS: dict[str, Any] = {
    "migrate": False,
    "geotiff_role_scores": {
        "data": 1,
        "visual": 2,
        "thumbnail": 2,
        "overview": 3,
    },
    "bbox_epsilon": 1e-10,
}

KNOWN_SETTINGS: frozenset[str] = frozenset(DEFAULTS)

# Environment variable pointing at a YAML config file
CONFIG_ENV_VAR = "STAC_ENTITIES_CONFIG"

ENV_PREFIX = "STAC_ENTITIES_"


def _get_env_var_name(key: str) -> str:
    """Convert a setting key to environment variable name.

    Args:
        key: Setting key (e.g., "bbox_epsilon")

    Returns:
        Environment variable name (e.g., "STAC_ENTITIES_BBOX_EPSILON")
    """
    return f"{ENV_PREFIX}{key.upper()}"


def _resolve_config_path(config_path: Path | str | None) -> Path | None:
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return None


def load_config(config_path: Path | str) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Config dictionary. Returns empty dict if the file doesn't exist or is empty.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    path = Path(config_path)
    if not path.exists():
        return {}

    try:
        content = path.read_text()
    except OSError as err:
        raise ConfigError(str(path), err.strerror or str(err)) from err
    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise ConfigError(str(path), str(err)) from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), "top-level value must be a mapping")
    return data


def get_setting(
    key: str,
    value: Any | None = None,
    config_path: Path | str | None = None,
) -> Any | None:
    """Resolve a setting with full precedence.

    Environment values are parsed as YAML scalars, so ``STAC_ENTITIES_MIGRATE=true``
    yields ``True`` and ``STAC_ENTITIES_BBOX_EPSILON=0.000001`` yields a float.

    Args:
        key: Setting key (e.g., "migrate", "geotiff_role_scores")
        value: Explicitly passed value (highest precedence)
        config_path: Optional YAML config file

    Returns:
        Resolved value, or the built-in default (None for unknown keys).
    """
    if value is not None:
        return value

    env_value = os.environ.get(_get_env_var_name(key))
    if env_value is not None:
        return yaml.safe_load(env_value)

    path = _resolve_config_path(config_path)
    if path is not None:
        config = load_config(path)
        if key in config:
            return config[key]

    # Defaults are copied so callers can't mutate them
    return copy.deepcopy(DEFAULTS.get(key))


def _is_valid_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value >= 0
    )


def _is_valid_role_scores(value: Any) -> bool:
    return isinstance(value, dict) and all(
        isinstance(role, str) and _is_valid_number(score) for role, score in value.items()
    )


# Checks applied before a resolved value is used by entity queries
VALIDATORS: dict[str, Callable[[Any], bool]] = {
    "migrate": lambda value: isinstance(value, bool),
    "geotiff_role_scores": _is_valid_role_scores,
    "bbox_epsilon": _is_valid_number,
}

# (key, env value, config path) -> validated value
_resolved_settings: dict[tuple[str, str | None, str | None], Any] = {}


def get_resolved_setting(key: str) -> Any:
    """Resolve a setting for use inside entity queries.

    Unlike ``get_setting`` this never raises: an unreadable config file or a
    value of the wrong type falls back to the built-in default with a warning.
    The result is cached per environment, so the config file is read at most
    once as long as ``STAC_ENTITIES_CONFIG`` and the setting's environment
    variable don't change. Call ``clear_settings_cache`` after editing the
    file itself.

    Args:
        key: A known setting key.

    Returns:
        A copy of the resolved value.
    """
    cache_key = (key, os.environ.get(_get_env_var_name(key)), os.environ.get(CONFIG_ENV_VAR))
    if cache_key not in _resolved_settings:
        try:
            value = get_setting(key)
        except (ConfigError, yaml.YAMLError) as err:
            logger.warning("Using default for setting %r: %s", key, err)
            value = DEFAULTS.get(key)
        validator = VALIDATORS.get(key)
        if validator is not None and not validator(value):
            logger.warning("Invalid value for setting %r: %r, using default", key, value)
            value = DEFAULTS.get(key)
        _resolved_settings[cache_key] = value
    return copy.deepcopy(_resolved_settings[cache_key])


def clear_settings_cache() -> None:
    """Forget all values cached by ``get_resolved_setting``."""
    _resolved_settings.clear()


def list_settings(config_path: Path | str | None = None) -> dict[str, dict[str, Any]]:
    """List all known settings with their resolved values and sources.

    Args:
        config_path: Optional YAML config file.

    Returns:
        Dict mapping setting keys to {"value": ..., "source": ...} where source
        is one of "env", "config" or "default".
    """
    path = _resolve_config_path(config_path)
    config = load_config(path) if path is not None else {}

    keys = set(KNOWN_SETTINGS) | set(config)
    result: dict[str, dict[str, Any]] = {}
    for key in sorted(keys):
        if _get_env_var_name(key) in os.environ:
            source = "env"
        elif key in config:
            source = "config"
        else:
            source = "default"
        result[key] = {
            "value": get_setting(key, config_path=path),
            "source": source,
        }
    return result
