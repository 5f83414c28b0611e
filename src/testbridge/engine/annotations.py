"""Declarative metadata understood by the built-in engine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple, TypeVar

METADATA_ATTRIBUTE = "__testbridge_metadata__"

T = TypeVar("T")


@dataclass(frozen=True)
class TestMetadata:
    __test__ = False

    suite_name: str = ""
    test_name: str = ""
    groups: Tuple[str, ...] = tuple()


def test(
    *,
    suite_name: str = "",
    test_name: str = "",
    groups: Optional[Iterable[str]] = None,
) -> Callable[[T], T]:
    """Attach suite/test names and groups to a test class or method."""

    metadata = TestMetadata(
        suite_name=suite_name,
        test_name=test_name,
        groups=tuple(groups or ()),
    )

    def decorate(target: T) -> T:
        setattr(target, METADATA_ATTRIBUTE, metadata)
        return target

    return decorate


test.__test__ = False  # type: ignore[attr-defined]


def own_metadata(target: object) -> Optional[TestMetadata]:
    """Return metadata declared directly on ``target``, ignoring inheritance."""

    namespace = getattr(target, "__dict__", {})
    value = namespace.get(METADATA_ATTRIBUTE)
    return value if isinstance(value, TestMetadata) else None


def method_groups(cls: type, method_name: str) -> Tuple[str, ...]:
    """Groups declared on the method plus those of its nearest annotated class."""

    groups: list[str] = []
    method = getattr(cls, method_name, None)
    method_meta = getattr(method, METADATA_ATTRIBUTE, None)
    if isinstance(method_meta, TestMetadata):
        groups.extend(method_meta.groups)
    for klass in cls.__mro__:
        class_meta = own_metadata(klass)
        if class_meta is not None:
            groups.extend(group for group in class_meta.groups if group not in groups)
            break
    return tuple(groups)
