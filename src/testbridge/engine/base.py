"""Engine abstractions and native result records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from testbridge.core.models import Plan

STATUS_STARTED = "started"
STATUS_SUCCESS = "success"
STATUS_FAILURE = "failure"
STATUS_SKIP = "skip"

PHASE_BEFORE = "before"
PHASE_AFTER = "after"


@dataclass(frozen=True)
class EngineResult:
    """Outcome of one test method, or of one configuration method."""

    suite: str
    test: str
    cls: type
    method: str
    status: str
    started_at: float
    finished_at: float
    error: Optional[BaseException] = None
    phase: Optional[str] = None

    @property
    def class_name(self) -> str:
        return f"{self.cls.__module__}.{self.cls.__qualname__}"

    @property
    def elapsed_ms(self) -> int:
        return int(round((self.finished_at - self.started_at) * 1000))


@runtime_checkable
class ResultListener(Protocol):
    """Basic per-test callbacks every engine delivers."""

    def on_test_start(self, result: EngineResult) -> None:
        ...

    def on_test_success(self, result: EngineResult) -> None:
        ...

    def on_test_failure(self, result: EngineResult) -> None:
        ...

    def on_test_skipped(self, result: EngineResult) -> None:
        ...


@runtime_checkable
class ConfigurationListener(Protocol):
    """Extended callbacks for failing class-level setup/teardown."""

    def on_configuration_failure(self, result: EngineResult) -> None:
        ...


class Engine:
    """Base interface for execution engines."""

    name: str = ""
    supports_configuration_events: bool = False

    def __init__(self) -> None:
        self.verbose = 1
        self.output_directory: Optional[str] = None
        self.source_path: Optional[str] = None
        self.parallel = "none"
        self.thread_count = 1
        self.suite_thread_pool_size = 1
        self.listeners: List[object] = []
        self.plan = Plan()
        self.suite_files: Sequence[str] = ()

    def set_plan(self, plan: Plan) -> None:
        self.plan = plan

    def set_suite_files(self, paths: Sequence[str]) -> None:
        self.suite_files = tuple(str(path) for path in paths)

    def add_listener(self, listener: object) -> None:
        self.listeners.append(listener)

    def run(self) -> None:
        raise NotImplementedError
