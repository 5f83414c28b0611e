"""Configurator strategies and the registry that names them."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Iterable, Optional

from testbridge.core.models import OptionSet, SuiteNode
from testbridge.errors import FatalConfigurationError

if TYPE_CHECKING:  # pragma: no cover
    from testbridge.engine.base import Engine


class Configurator:
    """Applies caller options to new suites and to the engine."""

    def configure_suite(self, suite: SuiteNode, options: OptionSet) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def configure_engine(self, engine: "Engine", options: OptionSet) -> None:  # pragma: no cover - interface
        raise NotImplementedError


ConfiguratorFactory = Callable[[], Configurator]


class ConfiguratorRegistry:
    """Maps strategy names to configurator factories."""

    def __init__(self) -> None:
        self._factories: Dict[str, ConfiguratorFactory] = {}

    def register(self, name: str, factory: ConfiguratorFactory) -> ConfiguratorFactory:
        if name in self._factories:
            raise ValueError(f"Configurator '{name}' already registered")
        self._factories[name] = factory
        return factory

    def update_or_register(self, name: str, factory: ConfiguratorFactory) -> ConfiguratorFactory:
        self._factories[name] = factory
        return factory

    def create(self, name: Optional[str]) -> Configurator:
        """Instantiate the named strategy; unknown or broken names are fatal."""

        if not name or name not in self._factories:
            raise FatalConfigurationError(f"Unknown configurator '{name}'; known: {', '.join(self.names())}")
        try:
            configurator = self._factories[name]()
        except Exception as exc:
            raise FatalConfigurationError(f"Unable to construct configurator '{name}': {exc}") from exc
        if not isinstance(configurator, Configurator):
            raise FatalConfigurationError(f"Configurator '{name}' produced {type(configurator).__name__}")
        return configurator

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def names(self) -> Iterable[str]:
        return tuple(self._factories.keys())


registry = ConfiguratorRegistry()


def register_configurator(name: str) -> Callable[[ConfiguratorFactory], ConfiguratorFactory]:
    """Decorator registering a configurator class under ``name``."""

    def decorate(factory: ConfiguratorFactory) -> ConfiguratorFactory:
        return registry.register(name, factory)

    return decorate


def load_builtins() -> None:
    from . import builtins  # noqa: F401

    for name, factory in builtins.BUILTIN_CONFIGURATORS.items():
        registry.update_or_register(name, factory)
