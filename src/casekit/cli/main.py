"""CLI entry point for casekit."""
from __future__ import annotations

import fnmatch
import logging
import sys
from typing import List, Optional, Sequence, Tuple

import click
from colorama import init as colorama_init

from casekit import __version__
from casekit.config import REPORT_FORMATS, RunSettings, load_settings
from casekit.core import CasekitError, TestFixture, TestMethod, TestRunner
from casekit.discovery import load_fixtures
from casekit.reporting import ReportManager, Reporter, TerminalReporter, XmlReporter

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"casekit {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the casekit version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for casekit."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.argument("source", type=str)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML settings file.",
)
@click.option("--timeout", type=click.IntRange(min=0), help="Default case timeout in milliseconds.")
@click.option("--tests", "test_filters", type=str, help="Comma-separated test name filters (supports globs).")
@click.option("--stop-on-error", is_flag=True, help="Stop after the first case that does not pass.")
@click.option("--list", "list_only", is_flag=True, help="List matched cases without running.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(list(REPORT_FORMATS)),
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report xml, write to this path.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.pass_obj
def run(
    state: CliState,
    source: str,
    config_path: Optional[str],
    timeout: Optional[int],
    test_filters: Optional[str],
    stop_on_error: bool,
    list_only: bool,
    report_format: Optional[str],
    report_path: Optional[str],
    no_color: bool,
) -> None:
    """Run the test fixtures found in SOURCE (a .py file or module name)."""

    try:
        settings = load_settings(config_path) if config_path else RunSettings()
        settings = settings.override(
            default_timeout=timeout,
            stop_on_error=True if stop_on_error else None,
            report_format=report_format,
            report_path=report_path,
            color=False if no_color else None,
        )
        fixtures = load_fixtures(source)
    except CasekitError as exc:
        raise click.ClickException(str(exc)) from exc
    cases = _select_cases(fixtures, _split_csv(test_filters))
    if list_only:
        for case in cases:
            click.echo(case.full_name)
        raise click.exceptions.Exit(0)
    if not cases:
        click.echo("No tests matched the provided filters.")
        raise click.exceptions.Exit(1)
    exit_code = run_cases(fixtures, cases, settings)
    raise click.exceptions.Exit(exit_code)


def run_cases(fixtures: Sequence[TestFixture], cases: Sequence[TestMethod], settings: RunSettings) -> int:
    """Execute ``cases``; returns process exit code (0 success, 1 failures)."""

    colorama_init()
    manager = ReportManager(_build_reporters(settings))
    manager.start(fixtures, len(cases))
    runner = TestRunner(settings.context())
    results = runner.run(cases, on_result=manager.handle_result)
    manager.complete(results)
    failures = sum(1 for result in results if result.status not in {"passed", "skipped"})
    return 0 if failures == 0 else 1


def _build_reporters(settings: RunSettings) -> List[Reporter]:
    if settings.report.format == "xml":
        return [XmlReporter(path=settings.report.path)]
    return [TerminalReporter(use_color=settings.report.color)]


def _select_cases(fixtures: Sequence[TestFixture], patterns: Tuple[str, ...]) -> List[TestMethod]:
    cases: List[TestMethod] = []
    for fixture in fixtures:
        for test in fixture.tests:
            if not isinstance(test, TestMethod):
                continue
            if patterns and not any(
                fnmatch.fnmatchcase(test.name, pattern) or fnmatch.fnmatchcase(test.full_name, pattern)
                for pattern in patterns
            ):
                continue
            cases.append(test)
    return cases


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return tuple()
    parts = [part.strip() for part in value.split(",") if part.strip()]
    return tuple(parts)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="casekit", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
