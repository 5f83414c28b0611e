"""Extended adapter that also reports failing setup/teardown fixtures."""
from __future__ import annotations

from testbridge.engine.base import PHASE_BEFORE, EngineResult

from .base import ReportEntry, RunListener
from .bridge import EngineReporter, ReporterKind


class ConfigurationAwareReporter(EngineReporter):
    kind = ReporterKind.EXTENDED

    def __init__(self, listener: RunListener, run_name: str) -> None:
        if not run_name:
            raise ValueError("run_name is required for configuration-aware reporting")
        super().__init__(listener)
        self.run_name = run_name

    def on_configuration_failure(self, result: EngineResult) -> None:
        entry = ReportEntry(
            source=result.class_name,
            name=result.method,
            elapsed_ms=result.elapsed_ms,
            cause=result.error,
            message=str(result.error) if result.error is not None else None,
            group=result.test,
            run=self.run_name,
        )
        if result.phase == PHASE_BEFORE:
            self._listener.before_configuration_failed(entry)
        else:
            self._listener.after_configuration_failed(entry)
