"""Terminal listener rendering results and a summary."""
from __future__ import annotations

import time
from typing import List, Tuple

import click
from colorama import Fore, Style, init as colorama_init

from .base import ReportEntry, RunListener

_LABELS = {
    "passed": ("PASS", Fore.GREEN),
    "failed": ("FAIL", Fore.RED),
    "skipped": ("SKIP", Fore.YELLOW),
    "config-before": ("SETUP-FAIL", Fore.RED),
    "config-after": ("TEARDOWN-FAIL", Fore.RED),
}


class TerminalListener(RunListener):
    """Human-readable listener that streams to stdout."""

    def __init__(self, *, use_color: bool = True) -> None:
        self._use_color = use_color
        self._start_time = 0.0
        self._counts = {status: 0 for status in _LABELS}
        self._failures: List[Tuple[str, ReportEntry]] = []
        if use_color:
            colorama_init()

    def on_start(self, run_name: str) -> None:
        self._start_time = time.perf_counter()
        self._counts = {status: 0 for status in _LABELS}
        self._failures.clear()
        click.echo(self._colored(f"Starting run: {run_name}", Fore.CYAN))

    def test_starting(self, entry: ReportEntry) -> None:
        return None

    def test_succeeded(self, entry: ReportEntry) -> None:
        self._print("passed", entry)

    def test_failed(self, entry: ReportEntry) -> None:
        self._print("failed", entry)

    def test_skipped(self, entry: ReportEntry) -> None:
        self._print("skipped", entry)

    def before_configuration_failed(self, entry: ReportEntry) -> None:
        self._print("config-before", entry)

    def after_configuration_failed(self, entry: ReportEntry) -> None:
        self._print("config-after", entry)

    def on_complete(self) -> None:
        duration = time.perf_counter() - self._start_time
        total = self._counts["passed"] + self._counts["failed"] + self._counts["skipped"]
        color = Fore.GREEN if not self.failure_count() else Fore.RED
        click.echo(
            self._colored("Summary", color)
            + f": total={total} passed={self._counts['passed']} failed={self._counts['failed']} "
            f"skipped={self._counts['skipped']} "
            f"config_failures={self._counts['config-before'] + self._counts['config-after']} "
            f"duration={duration:.2f}s"
        )

    def failure_count(self) -> int:
        return len(self._failures)

    def _print(self, status: str, entry: ReportEntry) -> None:
        self._counts[status] += 1
        label, color = _LABELS[status]
        elapsed = f" ({entry.elapsed_ms} ms)" if entry.elapsed_ms is not None else ""
        click.echo(f"{self._colored(f'{label:<13}', color)} {entry.identifier()}{elapsed}")
        if status in {"failed", "config-before", "config-after"}:
            self._failures.append((status, entry))
            if entry.message:
                click.echo(f"    detail: {entry.message}")

    def _colored(self, text: str, color: str) -> str:
        if not self._use_color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"
