"""Utility helpers for dynamic imports."""
from __future__ import annotations

import importlib
from typing import Any


def import_string(path: str) -> Any:
    """Return the attribute at the given dotted path.

    Supports ``module:attr`` or ``module.attr`` syntax. Nested attributes
    (``module:Outer.Inner``) are resolved one segment at a time.
    """

    if not path:
        raise ValueError("Empty import path provided")
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, sep, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ValueError(f"Invalid import path '{path}'")
    target: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise AttributeError(f"Module '{module_name}' has no attribute '{attr}'") from exc
    return target


def qualified_name(obj: Any) -> str:
    """Return the ``module:qualname`` path that :func:`import_string` accepts."""

    return f"{obj.__module__}:{obj.__qualname__}"
