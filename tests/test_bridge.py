from __future__ import annotations

import pytest
import sample_cases

from testbridge.engine import Engine, EngineResult, UnittestEngine
from testbridge.engine.base import PHASE_AFTER, PHASE_BEFORE, STATUS_FAILURE, STATUS_SKIP, STATUS_STARTED, STATUS_SUCCESS
from testbridge.errors import FatalConfigurationError
from testbridge.reporting import EngineReporter, RecordingListener, ReporterKind, probe_result_capability, select_reporter
from testbridge.reporting.configuration_aware import ConfigurationAwareReporter


def _result(method: str, status: str, error=None, phase=None) -> EngineResult:
    return EngineResult("S", "T", sample_cases.AlphaCase, method, status, 10.0, 10.25, error=error, phase=phase)


def test_probe_reports_engine_capability() -> None:
    assert probe_result_capability(UnittestEngine()) is ReporterKind.EXTENDED
    assert probe_result_capability(Engine()) is ReporterKind.BASIC


def test_extended_reporter_selected_when_supported() -> None:
    reporter = select_reporter(RecordingListener(), "run-1", UnittestEngine())
    assert isinstance(reporter, ConfigurationAwareReporter)
    assert reporter.kind is ReporterKind.EXTENDED
    assert reporter.run_name == "run-1"


def test_basic_reporter_for_basic_engine() -> None:
    reporter = select_reporter(RecordingListener(), "run-1", Engine())
    assert type(reporter) is EngineReporter
    assert reporter.kind is ReporterKind.BASIC


@pytest.mark.parametrize("path", ["testbridge.reporting.not_there:Reporter", "sample_cases:NoSuchReporter"])
def test_absent_extended_reporter_falls_back_silently(path: str) -> None:
    reporter = select_reporter(RecordingListener(), "run-1", UnittestEngine(), extended_path=path)
    assert type(reporter) is EngineReporter


def test_broken_extended_reporter_is_fatal() -> None:
    with pytest.raises(FatalConfigurationError, match="Bug in ExplodingReporter") as excinfo:
        select_reporter(RecordingListener(), "run-1", UnittestEngine(), extended_path="sample_cases:ExplodingReporter")
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_extended_reporter_with_missing_dependency_is_fatal() -> None:
    with pytest.raises(FatalConfigurationError, match="broken_reporter") as excinfo:
        select_reporter(RecordingListener(), "run-1", UnittestEngine(), extended_path="broken_reporter:Reporter")
    assert isinstance(excinfo.value.__cause__, ModuleNotFoundError)
    assert excinfo.value.__cause__.name == "not_a_real_dependency_xyz"


def test_extended_reporter_requires_run_name() -> None:
    with pytest.raises(FatalConfigurationError):
        select_reporter(RecordingListener(), "", UnittestEngine())


def test_events_translate_one_to_one_in_order() -> None:
    listener = RecordingListener()
    reporter = ConfigurationAwareReporter(listener, "run-1")
    failure = AssertionError("boom")
    reporter.on_configuration_failure(_result("setUpClass", STATUS_FAILURE, RuntimeError("db"), PHASE_BEFORE))
    reporter.on_test_start(_result("test_one", STATUS_STARTED))
    reporter.on_test_success(_result("test_one", STATUS_SUCCESS))
    reporter.on_test_start(_result("test_two", STATUS_STARTED))
    reporter.on_test_failure(_result("test_two", STATUS_FAILURE, failure))
    reporter.on_test_skipped(_result("test_three", STATUS_SKIP))
    reporter.on_configuration_failure(_result("tearDownClass", STATUS_FAILURE, RuntimeError("x"), PHASE_AFTER))
    assert listener.names() == [
        "before_configuration_failed",
        "test_starting",
        "test_succeeded",
        "test_starting",
        "test_failed",
        "test_skipped",
        "after_configuration_failed",
    ]
    failed = listener.events[4][1]
    assert failed.source == "sample_cases.AlphaCase"
    assert failed.name == "test_two"
    assert failed.elapsed_ms == 250
    assert failed.cause is failure
    assert failed.message == "boom"
    assert failed.group == "T"
    assert listener.events[5][1].message == "Skipped"
    assert listener.events[0][1].group == "T"
    assert listener.events[0][1].run == "run-1"
    assert failed.run is None
    assert listener.events[1][1].elapsed_ms is None
