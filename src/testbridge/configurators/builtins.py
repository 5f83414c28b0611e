"""Built-in configurator strategies."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional

from testbridge.core.models import (
    DATA_PROVIDER_THREAD_COUNT_OPTION,
    LISTENER_OPTION,
    PARALLEL_MODES,
    PARALLEL_OPTION,
    SUITE_THREAD_POOL_SIZE_OPTION,
    THREAD_COUNT_OPTION,
    OptionSet,
    SuiteNode,
)
from testbridge.errors import TestSetFailedError
from testbridge.utils import import_string

from .base import Configurator, ConfiguratorFactory

if TYPE_CHECKING:  # pragma: no cover
    from testbridge.engine.base import Engine


class NoopConfigurator(Configurator):
    """Leaves suites and engine untouched."""

    def configure_suite(self, suite: SuiteNode, options: OptionSet) -> None:
        return None

    def configure_engine(self, engine: "Engine", options: OptionSet) -> None:
        return None


class MapConfigurator(Configurator):
    """Copies well-known option keys onto suites and the engine."""

    def configure_suite(self, suite: SuiteNode, options: OptionSet) -> None:
        parallel = _parallel(options)
        if parallel is not None:
            suite.parallel = parallel
        thread_count = _positive_int(options, THREAD_COUNT_OPTION)
        if thread_count is not None:
            suite.thread_count = thread_count
        data_provider_threads = _positive_int(options, DATA_PROVIDER_THREAD_COUNT_OPTION)
        if data_provider_threads is not None:
            suite.data_provider_thread_count = data_provider_threads

    def configure_engine(self, engine: "Engine", options: OptionSet) -> None:
        parallel = _parallel(options)
        if parallel is not None:
            engine.parallel = parallel
        thread_count = _positive_int(options, THREAD_COUNT_OPTION)
        if thread_count is not None:
            engine.thread_count = thread_count
        pool_size = _positive_int(options, SUITE_THREAD_POOL_SIZE_OPTION)
        if pool_size is not None:
            engine.suite_thread_pool_size = pool_size
        for listener in _listeners(options):
            engine.add_listener(listener)


def _parallel(options: OptionSet) -> Optional[str]:
    value = options.get_blank_as_none(PARALLEL_OPTION)
    if value is None:
        return None
    mode = value.strip().lower()
    if mode == "false":
        mode = "none"
    if mode not in PARALLEL_MODES:
        raise TestSetFailedError(f"Invalid parallel mode '{value}'; expected one of {', '.join(PARALLEL_MODES)}")
    return mode


def _positive_int(options: OptionSet, key: str) -> Optional[int]:
    try:
        value = options.get_int(key)
    except ValueError as exc:
        raise TestSetFailedError(f"Option '{key}' must be an integer", exc) from exc
    if value is not None and value < 1:
        raise TestSetFailedError(f"Option '{key}' must be at least 1")
    return value


def _listeners(options: OptionSet) -> List[object]:
    value = options.get_blank_as_none(LISTENER_OPTION)
    if value is None:
        return []
    listeners: List[object] = []
    for path in (part.strip() for part in value.split(",")):
        if not path:
            continue
        try:
            target = import_string(path)
            listeners.append(target() if isinstance(target, type) else target)
        except Exception as exc:
            raise TestSetFailedError(f"Unable to create listener '{path}': {exc}", exc) from exc
    return listeners


BUILTIN_CONFIGURATORS: Dict[str, ConfiguratorFactory] = {
    "noop": NoopConfigurator,
    "default": MapConfigurator,
}
