"""Plan dataclasses shared across testbridge subsystems."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from testbridge.utils.importing import import_string, qualified_name

DEFAULT_SUITE_NAME = "Default suite"
DEFAULT_TEST_NAME = "Default test"

CONFIGURATOR_OPTION = "configurator"
GROUPS_OPTION = "groups"
EXCLUDED_GROUPS_OPTION = "excludegroups"
THREAD_COUNT_OPTION = "threadcount"
PARALLEL_OPTION = "parallel"
DATA_PROVIDER_THREAD_COUNT_OPTION = "dataproviderthreadcount"
SUITE_THREAD_POOL_SIZE_OPTION = "suitethreadpoolsize"
LISTENER_OPTION = "listener"

PARALLEL_MODES = ("none", "methods", "classes", "tests", "suites")


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class OptionSet(Mapping[str, str]):
    """Immutable string-to-string mapping carrying caller configuration."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        data = {str(key): str(value) for key, value in (values or {}).items() if value is not None}
        self._data = MappingProxyType(data)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"OptionSet({dict(self._data)!r})"

    def get_blank_as_none(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        return None if is_blank(value) else value

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get_blank_as_none(key)
        if value is None:
            return default
        return int(value.strip())

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get_blank_as_none(key)
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def merged(self, extra: Mapping[str, Any]) -> "OptionSet":
        combined: Dict[str, Any] = dict(self._data)
        combined.update(extra)
        return OptionSet(combined)


@dataclass(frozen=True)
class TestClassDescriptor:
    """A loadable test class together with its resolved suite/test names."""

    __test__ = False

    cls: type
    suite_name: str = DEFAULT_SUITE_NAME
    test_name: str = DEFAULT_TEST_NAME

    def ref(self) -> "ClassRef":
        return ClassRef.of(self.cls)


@dataclass(frozen=True)
class ClassRef:
    """Identity of a class assigned to a test node."""

    name: str
    cls: Optional[type] = None

    @classmethod
    def of(cls, klass: type) -> "ClassRef":
        return cls(name=qualified_name(klass), cls=klass)

    def load(self) -> type:
        if self.cls is not None:
            return self.cls
        loaded = import_string(self.name)
        if not isinstance(loaded, type):
            raise TypeError(f"'{self.name}' does not name a class")
        return loaded


@dataclass(frozen=True)
class Selector:
    """Base for method filters attached to a test node.

    ``name`` identifies the filter implementation; filters with a higher
    ``priority`` are evaluated later.
    """

    name: str
    priority: int

    def includes(self, cls: type, method_name: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class TestNode:
    """Named group of classes inside a suite; selectors attach here."""

    __test__ = False

    name: str
    selectors: List[Selector] = field(default_factory=list)
    classes: List[ClassRef] = field(default_factory=list)

    def ordered_selectors(self) -> Sequence[Selector]:
        return tuple(sorted(self.selectors, key=lambda selector: selector.priority))


@dataclass
class SuiteNode:
    name: str
    tests: List[TestNode] = field(default_factory=list)
    parallel: str = "none"
    thread_count: int = 1
    data_provider_thread_count: int = 10
    parameters: Dict[str, str] = field(default_factory=dict)

    def test(self, name: str) -> Optional[TestNode]:
        for node in self.tests:
            if node.name == name:
                return node
        return None


@dataclass
class Plan:
    suites: List[SuiteNode] = field(default_factory=list)

    def suite(self, name: str) -> Optional[SuiteNode]:
        for node in self.suites:
            if node.name == name:
                return node
        return None

    def class_count(self) -> int:
        return sum(len(test.classes) for suite in self.suites for test in suite.tests)
