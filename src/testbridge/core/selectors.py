"""Method selectors and the chain that builds them from options."""
from __future__ import annotations

import fnmatch
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from testbridge.engine.annotations import method_groups
from testbridge.errors import TestSetFailedError

from .models import (
    EXCLUDED_GROUPS_OPTION,
    GROUPS_OPTION,
    OptionSet,
    Selector,
    is_blank,
)

GROUP_MATCHER = "testbridge.group-matcher"
METHOD_NAME_FILTER = "testbridge.method-name-filter"

GROUP_MATCHER_PRIORITY = 9999
METHOD_NAME_PRIORITY = 10000


def split_expression(expression: Optional[str]) -> Tuple[str, ...]:
    if not expression:
        return tuple()
    return tuple(part.strip() for part in expression.split(",") if part.strip())


@dataclass(frozen=True)
class GroupMatchSelector(Selector):
    """Includes methods whose groups match ``include`` and none of ``exclude``."""

    include: Tuple[str, ...] = field(default_factory=tuple)
    exclude: Tuple[str, ...] = field(default_factory=tuple)

    def includes(self, cls: type, method_name: str) -> bool:
        groups = method_groups(cls, method_name)
        if self.exclude and _any_match(groups, self.exclude):
            return False
        if not self.include:
            return True
        return _any_match(groups, self.include)


@dataclass(frozen=True)
class MethodNameSelector(Selector):
    """Includes methods matching ``method`` or ``Class#method`` globs."""

    patterns: Tuple[str, ...] = field(default_factory=tuple)

    def includes(self, cls: type, method_name: str) -> bool:
        for pattern in self.patterns:
            class_pattern, sep, method_pattern = pattern.rpartition("#")
            if sep and not (
                fnmatch.fnmatchcase(cls.__name__, class_pattern)
                or fnmatch.fnmatchcase(f"{cls.__module__}.{cls.__qualname__}", class_pattern)
            ):
                continue
            if fnmatch.fnmatchcase(method_name, method_pattern):
                return True
        return False


def _any_match(groups: Tuple[str, ...], patterns: Tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatchcase(group, pattern) for group in groups for pattern in patterns)


def _group_matcher(*, include: Optional[str], exclude: Optional[str]) -> GroupMatchSelector:
    return GroupMatchSelector(
        name=GROUP_MATCHER,
        priority=GROUP_MATCHER_PRIORITY,
        include=split_expression(include),
        exclude=split_expression(exclude),
    )


def _method_name_filter(*, pattern: str) -> MethodNameSelector:
    patterns = split_expression(pattern)
    if not patterns:
        raise ValueError(f"Method pattern '{pattern}' has no usable entries")
    for entry in patterns:
        if entry.endswith("#"):
            raise ValueError(f"Method pattern '{entry}' is missing a method name")
        if entry.startswith("#"):
            raise ValueError(f"Method pattern '{entry}' is missing a class name")
    return MethodNameSelector(name=METHOD_NAME_FILTER, priority=METHOD_NAME_PRIORITY, patterns=patterns)


SelectorFactory = Callable[..., Selector]

# Selector implementations keyed by name.
SELECTOR_FACTORIES: Dict[str, SelectorFactory] = {
    GROUP_MATCHER: _group_matcher,
    METHOD_NAME_FILTER: _method_name_filter,
}


class SelectorChain:
    """Builds the selectors every new test node receives."""

    def __init__(self, factories: Optional[Dict[str, SelectorFactory]] = None) -> None:
        self._factories = SELECTOR_FACTORIES if factories is None else factories

    def build(self, options: OptionSet, method_pattern: Optional[str] = None) -> List[Selector]:
        selectors: List[Selector] = []
        groups = options.get(GROUPS_OPTION)
        excluded_groups = options.get(EXCLUDED_GROUPS_OPTION)
        if groups is not None or excluded_groups is not None:
            selectors.append(self._create(GROUP_MATCHER, include=groups, exclude=excluded_groups))
        if not is_blank(method_pattern):
            selectors.append(self._create(METHOD_NAME_FILTER, pattern=method_pattern))
        return selectors

    def _create(self, name: str, **params: object) -> Selector:
        try:
            factory = self._factories[name]
        except KeyError as exc:
            raise TestSetFailedError(f"No selector implementation registered as '{name}'", exc) from exc
        try:
            selector = factory(**params)
        except Exception as exc:
            raise TestSetFailedError(str(exc), exc) from exc
        if not isinstance(selector, Selector):
            raise TestSetFailedError(f"Selector implementation '{name}' returned {type(selector).__name__}")
        return selector
