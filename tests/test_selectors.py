from __future__ import annotations

import pytest
import sample_cases

from testbridge.core.models import OptionSet
from testbridge.core.selectors import (
    GROUP_MATCHER,
    METHOD_NAME_FILTER,
    SELECTOR_FACTORIES,
    GroupMatchSelector,
    MethodNameSelector,
    SelectorChain,
)
from testbridge.errors import TestSetFailedError


def test_no_options_yield_no_selectors() -> None:
    assert SelectorChain().build(OptionSet(), None) == []
    assert SelectorChain().build(OptionSet(), "   ") == []


def test_method_pattern_only() -> None:
    selectors = SelectorChain().build(OptionSet(), "test_one")
    assert [s.priority for s in selectors] == [10000]
    assert isinstance(selectors[0], MethodNameSelector)
    assert selectors[0].name == METHOD_NAME_FILTER


@pytest.mark.parametrize("options", [{"groups": "fast"}, {"excludegroups": "slow"}, {"groups": "a", "excludegroups": "b"}])
def test_group_options_only(options) -> None:
    selectors = SelectorChain().build(OptionSet(options))
    assert [s.priority for s in selectors] == [9999]
    assert selectors[0].name == GROUP_MATCHER


def test_both_filters_are_ordered_group_first() -> None:
    selectors = SelectorChain().build(OptionSet({"groups": "fast"}), "test_*")
    assert [type(s) for s in selectors] == [GroupMatchSelector, MethodNameSelector]
    assert [s.priority for s in selectors] == [9999, 10000]


def test_group_selector_carries_both_expressions() -> None:
    selector = SelectorChain().build(OptionSet({"groups": "fast, unit", "excludegroups": "slow"}))[0]
    assert selector.include == ("fast", "unit")
    assert selector.exclude == ("slow",)


def test_group_matching() -> None:
    cls = sample_cases.GroupedCase
    include_fast = GroupMatchSelector(name=GROUP_MATCHER, priority=9999, include=("fast",))
    assert include_fast.includes(cls, "test_fast")
    assert include_fast.includes(cls, "test_slow")
    exclude_slow = GroupMatchSelector(name=GROUP_MATCHER, priority=9999, exclude=("sl*",))
    assert exclude_slow.includes(cls, "test_fast")
    assert not exclude_slow.includes(cls, "test_slow")
    only_slow = GroupMatchSelector(name=GROUP_MATCHER, priority=9999, include=("slow",))
    assert not only_slow.includes(cls, "test_fast")
    assert not only_slow.includes(sample_cases.PlainCase, "test_plain")


def test_method_name_matching() -> None:
    selector = MethodNameSelector(name=METHOD_NAME_FILTER, priority=10000, patterns=("AlphaCase#test_o*", "test_plain"))
    assert selector.includes(sample_cases.AlphaCase, "test_one")
    assert not selector.includes(sample_cases.AlphaCase, "test_two")
    assert not selector.includes(sample_cases.BetaCase, "test_one")
    assert selector.includes(sample_cases.PlainCase, "test_plain")
    qualified = MethodNameSelector(name=METHOD_NAME_FILTER, priority=10000, patterns=("sample_cases.Beta*#*",))
    assert qualified.includes(sample_cases.BetaCase, "test_three")


def test_missing_implementation_fails_whole_build() -> None:
    chain = SelectorChain(factories={GROUP_MATCHER: SELECTOR_FACTORIES[GROUP_MATCHER]})
    with pytest.raises(TestSetFailedError) as excinfo:
        chain.build(OptionSet({"groups": "fast"}), "test_one")
    assert isinstance(excinfo.value.cause, KeyError)


def test_incompatible_factory_signature_is_wrapped() -> None:
    chain = SelectorChain(factories={**SELECTOR_FACTORIES, METHOD_NAME_FILTER: lambda: None})
    with pytest.raises(TestSetFailedError) as excinfo:
        chain.build(OptionSet(), "test_one")
    assert isinstance(excinfo.value.cause, TypeError)
    assert excinfo.value.__cause__ is excinfo.value.cause


def test_unusable_pattern_is_rejected() -> None:
    with pytest.raises(TestSetFailedError, match="no usable entries"):
        SelectorChain().build(OptionSet(), " , ")
    with pytest.raises(TestSetFailedError, match="missing a method name"):
        SelectorChain().build(OptionSet(), "AlphaCase#")
    with pytest.raises(TestSetFailedError, match="missing a class name"):
        SelectorChain().build(OptionSet(), "test_one,#test_two")
