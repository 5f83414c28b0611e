"""Reporting exports."""
from .base import ListenerManager, RecordingListener, ReportEntry, RunListener
from .bridge import EngineReporter, ReporterKind, probe_result_capability, select_reporter
from .json_reporter import JsonListener
from .terminal import TerminalListener

__all__ = [
    "EngineReporter",
    "JsonListener",
    "ListenerManager",
    "RecordingListener",
    "ReportEntry",
    "ReporterKind",
    "RunListener",
    "TerminalListener",
    "probe_result_capability",
    "select_reporter",
]
