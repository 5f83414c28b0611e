"""Failure types raised while preparing or running an engine."""
from __future__ import annotations

from typing import Optional


class TestSetFailedError(Exception):
    """Raised when a selector, configurator or plan cannot be set up."""

    __test__ = False

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class FatalConfigurationError(RuntimeError):
    """Unrecoverable packaging or strategy error; never retried."""
