"""JSON listener writing structured results into the reports directory."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
import time
from typing import Any, Dict, List, Optional

import click
from jsonschema import validate

from .base import ReportEntry, RunListener
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION

REPORT_FILENAME = "testbridge-report.json"


class JsonListener(RunListener):
    """Collects events and writes them as one validated JSON document."""

    def __init__(self, path: str) -> None:
        self._path = pathlib.Path(path)
        self._records: List[Dict[str, Any]] = []
        self._run_name: Optional[str] = None
        self._start_time = 0.0

    @property
    def path(self) -> pathlib.Path:
        return self._path

    def on_start(self, run_name: str) -> None:
        self._run_name = run_name
        self._records.clear()
        self._start_time = time.perf_counter()

    def test_starting(self, entry: ReportEntry) -> None:
        return None

    def test_succeeded(self, entry: ReportEntry) -> None:
        self._records.append(_entry_to_dict(entry, "passed"))

    def test_failed(self, entry: ReportEntry) -> None:
        self._records.append(_entry_to_dict(entry, "failed"))

    def test_skipped(self, entry: ReportEntry) -> None:
        self._records.append(_entry_to_dict(entry, "skipped"))

    def before_configuration_failed(self, entry: ReportEntry) -> None:
        self._records.append(_entry_to_dict(entry, "config-before"))

    def after_configuration_failed(self, entry: ReportEntry) -> None:
        self._records.append(_entry_to_dict(entry, "config-after"))

    def on_complete(self) -> None:
        if self._run_name is None:
            return
        payload = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"),
            "summary": _build_summary(self._run_name, self._records, time.perf_counter() - self._start_time),
            "results": self._records,
        }
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def _build_summary(run_name: str, records: List[Dict[str, Any]], duration: float) -> Dict[str, Any]:
    def count(status: str) -> int:
        return sum(1 for record in records if record["status"] == status)

    return {
        "run": run_name,
        "total": count("passed") + count("failed") + count("skipped"),
        "passed": count("passed"),
        "failed": count("failed"),
        "skipped": count("skipped"),
        "configuration_failures": count("config-before") + count("config-after"),
        "duration_s": duration,
    }


def _entry_to_dict(entry: ReportEntry, status: str) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "id": entry.identifier(),
        "class": entry.source,
        "method": entry.name,
        "status": status,
        "duration_ms": entry.elapsed_ms,
        "group": entry.group,
    }
    if entry.run:
        record["run"] = entry.run
    if entry.message:
        record["message"] = entry.message
    if entry.cause is not None:
        record["error_type"] = type(entry.cause).__name__
    return record
