"""Configurator registry helpers."""
from .base import (
    Configurator,
    ConfiguratorRegistry,
    load_builtins,
    register_configurator,
    registry,
)
from .builtins import MapConfigurator, NoopConfigurator

load_builtins()

__all__ = [
    "Configurator",
    "ConfiguratorRegistry",
    "MapConfigurator",
    "NoopConfigurator",
    "load_builtins",
    "register_configurator",
    "registry",
]
