from __future__ import annotations

import pytest
import sample_cases

from testbridge.configurators import MapConfigurator, NoopConfigurator, registry
from testbridge.configurators.base import ConfiguratorRegistry
from testbridge.core.models import OptionSet, SuiteNode
from testbridge.engine import UnittestEngine
from testbridge.errors import FatalConfigurationError, TestSetFailedError


def test_builtins_are_registered() -> None:
    assert {"noop", "default"}.issubset(set(registry.names()))
    assert isinstance(registry.create("noop"), NoopConfigurator)
    assert isinstance(registry.create("default"), MapConfigurator)


@pytest.mark.parametrize("name", [None, "", "missing"])
def test_unknown_configurator_is_fatal(name) -> None:
    with pytest.raises(FatalConfigurationError):
        registry.create(name)


def test_broken_factory_is_fatal() -> None:
    local = ConfiguratorRegistry()

    def broken():
        raise ImportError("strategy module missing")

    local.register("broken", broken)
    with pytest.raises(FatalConfigurationError) as excinfo:
        local.create("broken")
    assert isinstance(excinfo.value.__cause__, ImportError)


def test_duplicate_registration_rejected() -> None:
    local = ConfiguratorRegistry()
    local.register("noop", NoopConfigurator)
    with pytest.raises(ValueError):
        local.register("noop", NoopConfigurator)


def test_map_configurator_sets_suite_and_engine() -> None:
    options = OptionSet(
        {
            "parallel": "methods",
            "threadcount": "4",
            "dataproviderthreadcount": "2",
            "suitethreadpoolsize": "3",
            "listener": "sample_cases:NativeRecorder",
        }
    )
    suite = SuiteNode(name="S")
    engine = UnittestEngine()
    configurator = MapConfigurator()
    configurator.configure_suite(suite, options)
    configurator.configure_engine(engine, options)
    assert (suite.parallel, suite.thread_count, suite.data_provider_thread_count) == ("methods", 4, 2)
    assert (engine.parallel, engine.thread_count, engine.suite_thread_pool_size) == ("methods", 4, 3)
    assert isinstance(engine.listeners[0], sample_cases.NativeRecorder)


def test_map_configurator_leaves_defaults_alone() -> None:
    suite = SuiteNode(name="S")
    MapConfigurator().configure_suite(suite, OptionSet({"parallel": " "}))
    assert (suite.parallel, suite.thread_count) == ("none", 1)


@pytest.mark.parametrize(
    "options",
    [
        {"parallel": "sometimes"},
        {"threadcount": "many"},
        {"threadcount": "0"},
        {"listener": "sample_cases:DoesNotExist"},
    ],
)
def test_map_configurator_rejects_bad_values(options) -> None:
    with pytest.raises(TestSetFailedError):
        MapConfigurator().configure_engine(UnittestEngine(), OptionSet(options))
