"""Host listener interface definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class ReportEntry:
    """Payload of every host listener event."""

    source: str
    name: str
    elapsed_ms: Optional[int] = None
    cause: Optional[BaseException] = None
    message: Optional[str] = None
    group: Optional[str] = None
    run: Optional[str] = None

    def identifier(self) -> str:
        return f"{self.source}#{self.name}"


class RunListener:
    """Interface the host implements to receive translated results."""

    def test_starting(self, entry: ReportEntry) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def test_succeeded(self, entry: ReportEntry) -> None:  # pragma: no cover
        raise NotImplementedError

    def test_failed(self, entry: ReportEntry) -> None:  # pragma: no cover
        raise NotImplementedError

    def test_skipped(self, entry: ReportEntry) -> None:  # pragma: no cover
        raise NotImplementedError

    def before_configuration_failed(self, entry: ReportEntry) -> None:  # pragma: no cover
        raise NotImplementedError

    def after_configuration_failed(self, entry: ReportEntry) -> None:  # pragma: no cover
        raise NotImplementedError


class RecordingListener(RunListener):
    """Keeps every event as ``(event_name, entry)`` in arrival order."""

    def __init__(self) -> None:
        self.events: List[tuple[str, ReportEntry]] = []

    def test_starting(self, entry: ReportEntry) -> None:
        self.events.append(("test_starting", entry))

    def test_succeeded(self, entry: ReportEntry) -> None:
        self.events.append(("test_succeeded", entry))

    def test_failed(self, entry: ReportEntry) -> None:
        self.events.append(("test_failed", entry))

    def test_skipped(self, entry: ReportEntry) -> None:
        self.events.append(("test_skipped", entry))

    def before_configuration_failed(self, entry: ReportEntry) -> None:
        self.events.append(("before_configuration_failed", entry))

    def after_configuration_failed(self, entry: ReportEntry) -> None:
        self.events.append(("after_configuration_failed", entry))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]


class ListenerManager(RunListener):
    """Dispatches every event to several host listeners."""

    def __init__(self, listeners: Sequence[RunListener]) -> None:
        self._listeners = list(listeners)

    def start(self, run_name: str) -> None:
        for listener in self._listeners:
            on_start = getattr(listener, "on_start", None)
            if callable(on_start):
                on_start(run_name)

    def complete(self) -> None:
        for listener in self._listeners:
            on_complete = getattr(listener, "on_complete", None)
            if callable(on_complete):
                on_complete()

    def test_starting(self, entry: ReportEntry) -> None:
        for listener in self._listeners:
            listener.test_starting(entry)

    def test_succeeded(self, entry: ReportEntry) -> None:
        for listener in self._listeners:
            listener.test_succeeded(entry)

    def test_failed(self, entry: ReportEntry) -> None:
        for listener in self._listeners:
            listener.test_failed(entry)

    def test_skipped(self, entry: ReportEntry) -> None:
        for listener in self._listeners:
            listener.test_skipped(entry)

    def before_configuration_failed(self, entry: ReportEntry) -> None:
        for listener in self._listeners:
            listener.before_configuration_failed(entry)

    def after_configuration_failed(self, entry: ReportEntry) -> None:
        for listener in self._listeners:
            listener.after_configuration_failed(entry)

    def listeners(self) -> List[RunListener]:
        return list(self._listeners)
