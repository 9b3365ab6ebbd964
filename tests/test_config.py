from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from casekit.config import RunSettings, load_settings
from casekit.core import ConfigError


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "casekit.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def test_load_settings_full(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        default_timeout: 750
        stop_on_error: true
        report:
          format: xml
          path: out/report.xml
          color: false
        """,
    )
    settings = load_settings(path)
    assert settings.default_timeout == 750
    assert settings.stop_on_error is True
    assert settings.report.format == "xml"
    assert settings.report.path == "out/report.xml"
    assert settings.report.color is False
    context = settings.context()
    assert context.default_timeout == 750
    assert context.stop_on_error is True


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    assert load_settings(_write(tmp_path, "")) == RunSettings()


def test_schema_rejects_negative_timeout(tmp_path: Path) -> None:
    path = _write(tmp_path, "default_timeout: -1\n")
    with pytest.raises(ConfigError) as exc:
        load_settings(path)
    assert "default_timeout" in str(exc.value)


def test_schema_rejects_unknown_keys(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        report:
          format: html
        workers: 4
        """,
    )
    with pytest.raises(ConfigError) as exc:
        load_settings(path)
    message = str(exc.value)
    assert "report/format" in message
    assert "workers" in message


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(_write(tmp_path, "- 1\n- 2\n"))


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(_write(tmp_path, "report: [unclosed\n"))


def test_override_ignores_none() -> None:
    base = RunSettings(default_timeout=100)
    updated = base.override(default_timeout=None, stop_on_error=True, report_format="xml", color=None)
    assert updated.default_timeout == 100
    assert updated.stop_on_error is True
    assert updated.report.format == "xml"
    assert updated.report.color is True
