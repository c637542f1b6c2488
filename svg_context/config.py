"""Configuration loaded from YAML.

Lookup order for ``Config.load()``: explicit path, the ``SVG_CONTEXT_CONFIG``
environment variable, then built-in defaults.

Example ``svg-context.yaml``::

    precision: 2
    matrix_precision: 6
    resampling: high
    strict: true
    prune_empty_wrappers: true
    ellipsis: "…"
    pretty: true
    log_level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from svg_context.exceptions import ConfigError
from svg_context.imaging import ResamplingQuality

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SVG_CONTEXT_CONFIG"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    precision: int = 2
    matrix_precision: int = 6
    resampling: ResamplingQuality = ResamplingQuality.MEDIUM
    strict: bool = True
    prune_empty_wrappers: bool = True
    ellipsis: str = "…"
    pretty: bool = True
    log_level: str = "WARNING"

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if not env_path:
                return cls()
            path = env_path

        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        logger.debug("Loaded config from %s", config_path)
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        config = cls()
        for key in ("precision", "matrix_precision"):
            if key in data:
                value = data[key]
                if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 12:
                    raise ConfigError(f"'{key}' must be an integer between 0 and 12, got {value!r}")
                setattr(config, key, value)
        for key in ("strict", "prune_empty_wrappers", "pretty"):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ConfigError(f"'{key}' must be true or false, got {data[key]!r}")
                setattr(config, key, data[key])
        if "resampling" in data:
            try:
                config.resampling = ResamplingQuality(str(data["resampling"]).lower())
            except ValueError as e:
                raise ConfigError(
                    f"'resampling' must be one of low, medium, high, got {data['resampling']!r}"
                ) from e
        if "ellipsis" in data:
            config.ellipsis = str(data["ellipsis"])
        if "log_level" in data:
            level = str(data["log_level"]).upper()
            if level not in _LOG_LEVELS:
                raise ConfigError(f"'log_level' must be one of {', '.join(_LOG_LEVELS)}")
            config.log_level = level
        return config
