"""Engine that runs ``unittest.TestCase`` classes from a plan."""
from __future__ import annotations

import time
import unittest
from typing import List, Optional, Sequence

import click

from testbridge.core.models import Plan, SuiteNode, TestNode

from .base import (
    PHASE_AFTER,
    PHASE_BEFORE,
    STATUS_FAILURE,
    STATUS_SKIP,
    STATUS_STARTED,
    STATUS_SUCCESS,
    Engine,
    EngineResult,
)
from .descriptors import load_suite_files


class SkipClass(Exception):
    """Marks methods skipped because their class setup failed."""


class _CapturingResult(unittest.TestResult):
    """Keeps the raised exception instead of a formatted traceback."""

    def __init__(self) -> None:
        super().__init__()
        self.status = STATUS_SUCCESS
        self.error: Optional[BaseException] = None

    def addError(self, test, err) -> None:  # noqa: N802 - unittest API
        super().addError(test, err)
        self._record(STATUS_FAILURE, err[1])

    def addFailure(self, test, err) -> None:  # noqa: N802
        super().addFailure(test, err)
        self._record(STATUS_FAILURE, err[1])

    def addSkip(self, test, reason) -> None:  # noqa: N802
        super().addSkip(test, reason)
        if self.status != STATUS_FAILURE:
            self.status = STATUS_SKIP
            self.error = unittest.SkipTest(reason)

    def addSubTest(self, test, subtest, err) -> None:  # noqa: N802
        super().addSubTest(test, subtest, err)
        if err is not None:
            self._record(STATUS_FAILURE, err[1])

    def addUnexpectedSuccess(self, test) -> None:  # noqa: N802
        super().addUnexpectedSuccess(test)
        self._record(STATUS_FAILURE, AssertionError("unexpected success"))

    def _record(self, status: str, error: Optional[BaseException]) -> None:
        if self.status == STATUS_FAILURE:
            return
        self.status = status
        self.error = error


class UnittestEngine(Engine):
    """Runs suites sequentially and reports through native listeners."""

    name = "unittest"
    supports_configuration_events = True

    def __init__(self) -> None:
        super().__init__()
        self._loader = unittest.TestLoader()
        self._counts = {STATUS_SUCCESS: 0, STATUS_FAILURE: 0, STATUS_SKIP: 0}
        self._configuration_failures = 0

    def run(self) -> None:
        suites: List[SuiteNode] = list(self.plan.suites)
        if self.suite_files:
            suites.extend(load_suite_files(self.suite_files).suites)
        for suite in suites:
            for test in suite.tests:
                self._run_test(suite, test)
        if self.verbose > 0:
            click.echo(
                f"Total tests run: {sum(self._counts.values())}, "
                f"Failures: {self._counts[STATUS_FAILURE]}, Skips: {self._counts[STATUS_SKIP]}, "
                f"Configuration failures: {self._configuration_failures}"
            )

    def collect_methods(self, test: TestNode, cls: type) -> List[str]:
        selectors = test.ordered_selectors()
        names = self._loader.getTestCaseNames(cls)
        return [name for name in names if all(selector.includes(cls, name) for selector in selectors)]

    def _run_test(self, suite: SuiteNode, test: TestNode) -> None:
        for ref in test.classes:
            cls = ref.load()
            methods = self.collect_methods(test, cls)
            if methods:
                self._run_class(suite, test, cls, methods)

    def _run_class(self, suite: SuiteNode, test: TestNode, cls: type, methods: Sequence[str]) -> None:
        if getattr(cls, "__unittest_skip__", False):
            # class-level skip: unittest reports every method, fixtures never run
            for method in methods:
                self._run_method(suite, test, cls, method)
            return
        setup_error = self._call_fixture(suite, test, cls, "setUpClass", PHASE_BEFORE)
        if setup_error is not None:
            for method in methods:
                now = time.time()
                skipped = EngineResult(
                    suite.name, test.name, cls, method, STATUS_SKIP, now, now,
                    error=SkipClass(f"setUpClass failed: {setup_error}"),
                )
                self._emit("on_test_skipped", skipped)
            return
        for method in methods:
            self._run_method(suite, test, cls, method)
        self._call_fixture(suite, test, cls, "tearDownClass", PHASE_AFTER)

    def _run_method(self, suite: SuiteNode, test: TestNode, cls: type, method: str) -> None:
        started = time.time()
        self._emit("on_test_start", EngineResult(suite.name, test.name, cls, method, STATUS_STARTED, started, started))
        outcome = _CapturingResult()
        cls(method).run(outcome)
        result = EngineResult(
            suite.name, test.name, cls, method, outcome.status, started, time.time(), error=outcome.error
        )
        callback = {
            STATUS_SUCCESS: "on_test_success",
            STATUS_FAILURE: "on_test_failure",
            STATUS_SKIP: "on_test_skipped",
        }[outcome.status]
        self._emit(callback, result)

    def _call_fixture(
        self, suite: SuiteNode, test: TestNode, cls: type, fixture: str, phase: str
    ) -> Optional[BaseException]:
        started = time.time()
        try:
            getattr(cls, fixture)()
        except Exception as exc:
            self._configuration_failures += 1
            failure = EngineResult(
                suite.name, test.name, cls, fixture, STATUS_FAILURE, started, time.time(), error=exc, phase=phase
            )
            self._dispatch("on_configuration_failure", failure)
            return exc
        return None

    def _emit(self, callback: str, result: EngineResult) -> None:
        if result.status in self._counts:
            self._counts[result.status] += 1
        self._dispatch(callback, result)

    def _dispatch(self, callback: str, result: EngineResult) -> None:
        # listeners may implement only part of the callback set
        for listener in self.listeners:
            handler = getattr(listener, callback, None)
            if callable(handler):
                handler(result)
