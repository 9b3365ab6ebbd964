"""Run settings loaded from YAML."""

from .loader import SETTINGS_SCHEMA, load_settings, parse_settings
from .models import REPORT_FORMATS, ReportSettings, RunSettings

__all__ = [
    "REPORT_FORMATS",
    "ReportSettings",
    "RunSettings",
    "SETTINGS_SCHEMA",
    "load_settings",
    "parse_settings",
]
