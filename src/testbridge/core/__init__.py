"""Plan models and builders exposed at the package level."""
from .metadata import MetadataResolver, probe_metadata_support
from .models import (
    DEFAULT_SUITE_NAME,
    DEFAULT_TEST_NAME,
    ClassRef,
    OptionSet,
    Plan,
    Selector,
    SuiteNode,
    TestClassDescriptor,
    TestNode,
)
from .plan_builder import PlanBuilder
from .selectors import GroupMatchSelector, MethodNameSelector, SelectorChain

__all__ = [
    "DEFAULT_SUITE_NAME",
    "DEFAULT_TEST_NAME",
    "ClassRef",
    "GroupMatchSelector",
    "MetadataResolver",
    "MethodNameSelector",
    "OptionSet",
    "Plan",
    "PlanBuilder",
    "Selector",
    "SelectorChain",
    "SuiteNode",
    "TestClassDescriptor",
    "TestNode",
    "probe_metadata_support",
]
