"""Translate engine result callbacks into host listener events."""
from __future__ import annotations

import enum
import importlib
from typing import Optional

from testbridge.engine.base import ConfigurationListener, Engine, EngineResult
from testbridge.errors import FatalConfigurationError

from .base import ReportEntry, RunListener

EXTENDED_REPORTER_PATH = "testbridge.reporting.configuration_aware:ConfigurationAwareReporter"


class ReporterKind(enum.Enum):
    BASIC = "basic"
    EXTENDED = "extended"


class EngineReporter:
    """Basic adapter: test start, success, failure and skip."""

    kind = ReporterKind.BASIC

    def __init__(self, listener: RunListener) -> None:
        self._listener = listener

    def on_test_start(self, result: EngineResult) -> None:
        self._listener.test_starting(ReportEntry(source=result.class_name, name=result.method, group=result.test))

    def on_test_success(self, result: EngineResult) -> None:
        self._listener.test_succeeded(self._finished(result))

    def on_test_failure(self, result: EngineResult) -> None:
        self._listener.test_failed(self._finished(result))

    def on_test_skipped(self, result: EngineResult) -> None:
        self._listener.test_skipped(self._finished(result, default_message="Skipped"))

    def _finished(self, result: EngineResult, default_message: Optional[str] = None) -> ReportEntry:
        message = str(result.error) if result.error is not None else default_message
        return ReportEntry(
            source=result.class_name,
            name=result.method,
            elapsed_ms=result.elapsed_ms,
            cause=result.error,
            message=message,
            group=result.test,
        )


def probe_result_capability(engine: Engine) -> ReporterKind:
    """EXTENDED when the engine delivers configuration-failure callbacks."""

    if getattr(engine, "supports_configuration_events", False):
        return ReporterKind.EXTENDED
    return ReporterKind.BASIC


def locate_extended_reporter(path: str = EXTENDED_REPORTER_PATH) -> Optional[type]:
    """Return the extended adapter class, or None when it is not installed.

    Only a missing module or a missing attribute counts as absence; a module
    that exists but fails to import is a packaging error.
    """

    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        if exc.name and (module_name == exc.name or module_name.startswith(f"{exc.name}.")):
            return None
        raise FatalConfigurationError(f"Extended reporter module '{module_name}' failed to import: {exc}") from exc
    except Exception as exc:
        raise FatalConfigurationError(f"Extended reporter module '{module_name}' failed to import: {exc}") from exc
    target: object = module
    for part in attr.split("."):
        target = getattr(target, part, None)
        if target is None:
            return None
    return target  # type: ignore[return-value]


def select_reporter(
    listener: RunListener,
    run_name: str,
    engine: Engine,
    *,
    extended_path: Optional[str] = None,
) -> EngineReporter:
    """Pick the richest adapter the engine and environment support.

    An absent extended adapter falls back to the basic one silently; an
    extended adapter that exists but cannot be constructed is fatal.
    """

    if probe_result_capability(engine) is ReporterKind.BASIC:
        return EngineReporter(listener)
    reporter_cls = locate_extended_reporter(extended_path or EXTENDED_REPORTER_PATH)
    if reporter_cls is None:
        return EngineReporter(listener)
    try:
        reporter = reporter_cls(listener, run_name)
    except Exception as exc:
        raise FatalConfigurationError(f"Bug in {getattr(reporter_cls, '__name__', reporter_cls)}") from exc
    if not isinstance(reporter, ConfigurationListener):
        raise FatalConfigurationError(f"{type(reporter).__name__} does not accept configuration failures")
    return reporter
