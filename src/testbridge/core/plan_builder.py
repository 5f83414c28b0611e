"""Group test classes into the suite/test/class plan."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Optional, Sequence, Tuple

from .metadata import MetadataResolver
from .models import OptionSet, Plan, Selector, SuiteNode, TestNode

if TYPE_CHECKING:  # pragma: no cover
    from testbridge.configurators.base import Configurator


class PlanBuilder:
    """Stable group-by on (suite name, test name).

    A suite is configured once, when it is first seen; a test node receives
    its selectors once, when it is first seen.
    """

    def __init__(
        self,
        configurator: "Configurator",
        options: OptionSet,
        selectors: Sequence[Selector] = (),
        *,
        resolver: Optional[MetadataResolver] = None,
    ) -> None:
        self._configurator = configurator
        self._options = options
        self._selectors = tuple(selectors)
        self._resolver = resolver or MetadataResolver()

    def build(self, classes: Iterable[type]) -> Plan:
        plan = Plan()
        suites: Dict[str, SuiteNode] = {}
        tests: Dict[Tuple[str, str], TestNode] = {}
        for cls in classes:
            descriptor = self._resolver.resolve(cls)
            suite = suites.get(descriptor.suite_name)
            if suite is None:
                suite = SuiteNode(name=descriptor.suite_name)
                self._configurator.configure_suite(suite, self._options)
                plan.suites.append(suite)
                suites[descriptor.suite_name] = suite
            key = (descriptor.suite_name, descriptor.test_name)
            test = tests.get(key)
            if test is None:
                test = TestNode(name=descriptor.test_name, selectors=list(self._selectors))
                suite.tests.append(test)
                tests[key] = test
            test.classes.append(descriptor.ref())
        return plan
