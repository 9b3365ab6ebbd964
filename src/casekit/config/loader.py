"""YAML loader and validation for run settings."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from jsonschema import Draft7Validator

from casekit.core.errors import ConfigError

from .models import REPORT_FORMATS, ReportSettings, RunSettings

SETTINGS_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "casekit settings",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "default_timeout": {"type": "integer", "minimum": 0},
        "stop_on_error": {"type": "boolean"},
        "report": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "format": {"enum": list(REPORT_FORMATS)},
                "path": {"type": ["string", "null"]},
                "color": {"type": "boolean"},
            },
        },
    },
}

_validator = Draft7Validator(SETTINGS_SCHEMA)


def load_settings(path: str | Path) -> RunSettings:
    """Load and validate a settings file."""

    settings_path = Path(path).expanduser().resolve()
    try:
        raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read settings file {settings_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {settings_path}: {exc}") from exc
    return parse_settings(raw or {})


def parse_settings(raw: Any) -> RunSettings:
    if not isinstance(raw, Mapping):
        raise ConfigError("Settings file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: [str(part) for part in e.path])
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ConfigError(f"Settings validation failed: {messages}")
    report_raw = raw.get("report") or {}
    report = ReportSettings(
        format=report_raw.get("format", "terminal"),
        path=report_raw.get("path"),
        color=bool(report_raw.get("color", True)),
    )
    return RunSettings(
        default_timeout=int(raw.get("default_timeout", 0)),
        stop_on_error=bool(raw.get("stop_on_error", False)),
        report=report,
    )
