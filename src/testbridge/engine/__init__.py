"""Engine interface exports."""
from .annotations import TestMetadata, test
from .base import ConfigurationListener, Engine, EngineResult, ResultListener
from .descriptors import load_suite_file, load_suite_files
from .unittest_engine import UnittestEngine

__all__ = [
    "ConfigurationListener",
    "Engine",
    "EngineResult",
    "ResultListener",
    "TestMetadata",
    "UnittestEngine",
    "load_suite_file",
    "load_suite_files",
    "test",
]
