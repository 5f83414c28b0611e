"""Resolve suite/test names declared on test classes."""
from __future__ import annotations

import importlib
from typing import Optional

from .models import DEFAULT_SUITE_NAME, DEFAULT_TEST_NAME, TestClassDescriptor, is_blank

METADATA_MODULE = "testbridge.engine.annotations"


def probe_metadata_support(module_name: str = METADATA_MODULE) -> bool:
    """Return True when the engine's metadata decorators can be imported."""

    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return False
    return callable(getattr(module, "own_metadata", None))


HAS_TEST_METADATA = probe_metadata_support()


class MetadataResolver:
    """Finds the nearest ancestor carrying suite/test metadata."""

    def __init__(self, *, enabled: Optional[bool] = None) -> None:
        self._enabled = HAS_TEST_METADATA if enabled is None else enabled

    def resolve(self, cls: type) -> TestClassDescriptor:
        suite_name = DEFAULT_SUITE_NAME
        test_name = DEFAULT_TEST_NAME
        if self._enabled:
            metadata = self._find_metadata(cls)
            if metadata is not None:
                if not is_blank(metadata.suite_name):
                    suite_name = metadata.suite_name
                if not is_blank(metadata.test_name):
                    test_name = metadata.test_name
        return TestClassDescriptor(cls=cls, suite_name=suite_name, test_name=test_name)

    def _find_metadata(self, cls: type):
        from testbridge.engine.annotations import own_metadata

        # most-derived first; the first annotated class wins
        for klass in cls.__mro__:
            metadata = own_metadata(klass)
            if metadata is not None:
                return metadata
        return None
