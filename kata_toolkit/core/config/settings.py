from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from kata_toolkit.core.braces.expand_braces import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

DEFAULT_SETTINGS: dict[str, Any] = {
    "max_brace_depth": DEFAULT_MAX_DEPTH,
    "log_level": "WARNING",
    "log_format": "text",
}


class SettingsConfigError(ValueError):
    pass


@dataclass(frozen=True)
class KataSettings:
    max_brace_depth: int
    log_level: str
    log_format: str


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Load settings overrides from a YAML file.

    Format:
      max_brace_depth: 32
      log_level: INFO
      log_format: json

    Unknown keys are rejected so typos do not pass silently.
    """
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise SettingsConfigError(f"settings file is not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsConfigError(f"settings file is not valid YAML: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SettingsConfigError("settings file must be a mapping of name -> value")

    out: dict[str, Any] = {}
    for k, v in raw.items():
        if k not in DEFAULT_SETTINGS:
            raise SettingsConfigError(
                f"unknown setting '{k}' (choose from: {', '.join(sorted(DEFAULT_SETTINGS))})"
            )
        out[k] = _check_value(k, v)
    return out


def merged_settings(overrides: dict[str, Any] | None = None) -> KataSettings:
    """Return DEFAULT_SETTINGS merged with optional overrides.

    None values in overrides are ignored so unset CLI options keep file/default values.
    """
    merged = dict(DEFAULT_SETTINGS)
    if overrides:
        for k, v in overrides.items():
            if v is None:
                continue
            if k not in DEFAULT_SETTINGS:
                raise SettingsConfigError(f"unknown setting '{k}'")
            merged[k] = _check_value(k, v)
    return KataSettings(**merged)


def load_and_merge(settings_file: str | None) -> KataSettings:
    if not settings_file:
        return merged_settings()
    overrides = load_settings_file(settings_file)
    return merged_settings(overrides)


def _check_value(key: str, value: Any) -> Any:
    if key == "max_brace_depth":
        if isinstance(value, bool) or not isinstance(value, int):
            raise SettingsConfigError("max_brace_depth must be an integer")
        if not 1 <= value <= MAX_DEPTH_LIMIT:
            raise SettingsConfigError(f"max_brace_depth must be between 1 and {MAX_DEPTH_LIMIT}")
        return value
    if key == "log_level":
        if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
            raise SettingsConfigError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return value.upper()
    if key == "log_format":
        if value not in LOG_FORMATS:
            raise SettingsConfigError(f"log_format must be one of: {', '.join(LOG_FORMATS)}")
        return value
    return value
