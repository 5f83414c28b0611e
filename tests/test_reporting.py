from __future__ import annotations

import json
from pathlib import Path

from jsonschema import validate

from testbridge.reporting import JsonListener, ListenerManager, RecordingListener, ReportEntry, TerminalListener
from testbridge.reporting.schema import JSON_SCHEMA_V1


def _entries():
    ok = ReportEntry(source="pkg.Case", name="test_ok", elapsed_ms=3, group="T")
    bad = ReportEntry(source="pkg.Case", name="test_bad", elapsed_ms=5, cause=AssertionError("nope"), message="nope")
    setup = ReportEntry(source="pkg.Case", name="setUpClass", cause=RuntimeError("db"), message="db", group="T", run="run-1")
    return ok, bad, setup


def test_terminal_listener_prints_results_and_summary(capsys) -> None:
    ok, bad, setup = _entries()
    listener = TerminalListener(use_color=False)
    listener.on_start("run-1")
    listener.test_starting(ok)
    listener.test_succeeded(ok)
    listener.test_failed(bad)
    listener.before_configuration_failed(setup)
    listener.on_complete()
    out = capsys.readouterr().out
    assert "Starting run: run-1" in out
    assert "PASS          pkg.Case#test_ok (3 ms)" in out
    assert "FAIL          pkg.Case#test_bad (5 ms)" in out
    assert "    detail: nope" in out
    assert "SETUP-FAIL    pkg.Case#setUpClass" in out
    assert "Summary: total=2 passed=1 failed=1 skipped=0 config_failures=1" in out
    assert listener.failure_count() == 2


def test_json_listener_writes_valid_report(tmp_path: Path) -> None:
    ok, bad, setup = _entries()
    path = tmp_path / "out" / "report.json"
    listener = JsonListener(str(path))
    listener.on_start("run-1")
    listener.test_succeeded(ok)
    listener.test_failed(bad)
    listener.test_skipped(ReportEntry(source="pkg.Case", name="test_skip", elapsed_ms=0, message="Skipped"))
    listener.after_configuration_failed(setup)
    listener.on_complete()
    payload = json.loads(path.read_text(encoding="utf-8"))
    validate(instance=payload, schema=JSON_SCHEMA_V1)
    assert payload["summary"]["run"] == "run-1"
    assert (payload["summary"]["total"], payload["summary"]["failed"]) == (3, 1)
    assert payload["summary"]["configuration_failures"] == 1
    assert [record["status"] for record in payload["results"]] == ["passed", "failed", "skipped", "config-after"]
    assert payload["results"][1]["error_type"] == "AssertionError"
    assert payload["results"][3]["group"] == "T"
    assert payload["results"][3]["run"] == "run-1"
    assert "run" not in payload["results"][0]


def test_json_listener_without_start_writes_nothing(tmp_path: Path) -> None:
    path = tmp_path / "report.json"
    JsonListener(str(path)).on_complete()
    assert not path.exists()


def test_listener_manager_fans_out() -> None:
    first, second = RecordingListener(), RecordingListener()
    manager = ListenerManager([first, second])
    ok, bad, _ = _entries()
    manager.start("run")
    manager.test_starting(ok)
    manager.test_failed(bad)
    manager.complete()
    assert first.names() == second.names() == ["test_starting", "test_failed"]
    assert manager.listeners() == [first, second]
