"""CLI entry point for testbridge."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import click

from testbridge import __version__, bootstrap
from testbridge.core.executor import run_classes, run_suite_files
from testbridge.core.models import CONFIGURATOR_OPTION, EXCLUDED_GROUPS_OPTION, GROUPS_OPTION, OptionSet
from testbridge.reporting import JsonListener, ListenerManager, RunListener, TerminalListener
from testbridge.reporting.json_reporter import REPORT_FILENAME
from testbridge.utils import import_string


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"testbridge {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Echo the resolved options before running.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the testbridge version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for testbridge."""

    bootstrap()
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.option("--class", "class_paths", multiple=True, help="Test class as module:Class (repeatable).")
@click.option(
    "--suite-file",
    "suite_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML suite descriptor (repeatable); replaces --class.",
)
@click.option("--groups", type=str, help="Comma-separated groups to include (globs allowed).")
@click.option("--excluded-groups", type=str, help="Comma-separated groups to exclude.")
@click.option("--method", "method_pattern", type=str, help="Method filter: 'name', 'Class#name', globs.")
@click.option("--configurator", default="default", show_default=True, help="Configurator strategy name.")
@click.option("-o", "--option", "extra_options", multiple=True, help="Extra key=value option (repeatable).")
@click.option("--source-dir", type=click.Path(file_okay=False), help="Test source directory passed to the engine.")
@click.option("--reports-dir", default="reports", show_default=True, type=click.Path(file_okay=False))
@click.option("--run-name", default="testbridge", show_default=True, help="Name identifying this run.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    default="terminal",
    show_default=True,
    help="Report format (terminal by default).",
)
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.pass_obj
def run(
    state: CliState,
    class_paths: Tuple[str, ...],
    suite_files: Tuple[str, ...],
    groups: Optional[str],
    excluded_groups: Optional[str],
    method_pattern: Optional[str],
    configurator: str,
    extra_options: Tuple[str, ...],
    source_dir: Optional[str],
    reports_dir: str,
    run_name: str,
    report_format: str,
    no_color: bool,
) -> None:
    """Run test classes or suite files and report the results."""

    if bool(class_paths) == bool(suite_files):
        raise click.UsageError("Provide either --class or --suite-file (not both).")
    values: Dict[str, str] = _parse_options(extra_options)
    values[CONFIGURATOR_OPTION] = configurator
    if groups is not None:
        values[GROUPS_OPTION] = groups
    if excluded_groups is not None:
        values[EXCLUDED_GROUPS_OPTION] = excluded_groups
    options = OptionSet(values)
    if state.verbose:
        for key in sorted(options):
            click.echo(f"option {key}={options[key]}")

    terminal = TerminalListener(use_color=not no_color)
    listeners: List[RunListener] = [terminal]
    if report_format == "json":
        listeners.append(JsonListener(str(Path(reports_dir) / REPORT_FILENAME)))
    manager = ListenerManager(listeners)
    classes = [_load_class(path) for path in class_paths]
    try:
        manager.start(run_name)
        if suite_files:
            run_suite_files(list(suite_files), source_dir, options, manager, run_name, reports_dir)
        else:
            run_classes(classes, source_dir, options, manager, run_name, reports_dir, method_pattern)
        manager.complete()
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(0 if terminal.failure_count() == 0 else 1)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="testbridge", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


def _load_class(path: str) -> type:
    try:
        target = import_string(path)
    except (ImportError, AttributeError, ValueError) as exc:
        raise click.BadParameter(f"Cannot import test class '{path}': {exc}", param_hint="--class") from exc
    if not isinstance(target, type):
        raise click.BadParameter(f"'{path}' is not a class", param_hint="--class")
    return target


def _parse_options(specs: Tuple[str, ...]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for spec in specs:
        key, sep, value = spec.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected key=value, got '{spec}'", param_hint="--option")
        values[key.strip()] = value.strip()
    return values


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
