"""YAML loader and validation for suite descriptor files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import yaml
from jsonschema import Draft7Validator

from testbridge.core.models import PARALLEL_MODES, ClassRef, Plan, Selector, SuiteNode, TestNode

_STRING_LIST = {"type": "array", "items": {"type": "string", "minLength": 1}}

DESCRIPTOR_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "testbridge suite descriptor",
    "type": "object",
    "required": ["name", "tests"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "parallel": {"type": "string", "enum": list(PARALLEL_MODES)},
        "thread_count": {"type": "integer", "minimum": 1},
        "parameters": {"type": "object", "additionalProperties": {"type": ["string", "number", "boolean"]}},
        "tests": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "classes"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "classes": _STRING_LIST,
                    "groups": {
                        "type": "object",
                        "properties": {"include": _STRING_LIST, "exclude": _STRING_LIST},
                        "additionalProperties": False,
                    },
                    "methods": _STRING_LIST,
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}

_validator = Draft7Validator(DESCRIPTOR_SCHEMA)


def load_suite_file(path: str) -> SuiteNode:
    """Load and validate one descriptor file."""

    suite_path = Path(path).expanduser().resolve()
    raw = yaml.safe_load(suite_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Suite file {suite_path} must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: [str(part) for part in e.path])
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ValueError(f"Suite file {suite_path} failed validation: {messages}")
    suite = SuiteNode(
        name=raw["name"].strip(),
        parallel=raw.get("parallel", "none"),
        thread_count=int(raw.get("thread_count", 1)),
        parameters={str(k): str(v) for k, v in (raw.get("parameters") or {}).items()},
    )
    seen: set[str] = set()
    for entry in raw["tests"]:
        name = entry["name"].strip()
        if name in seen:
            raise ValueError(f"Duplicate test '{name}' in suite file {suite_path}")
        seen.add(name)
        suite.tests.append(
            TestNode(
                name=name,
                selectors=_parse_selectors(entry),
                classes=[ClassRef(name=item.strip()) for item in entry["classes"]],
            )
        )
    return suite


def load_suite_files(paths: Sequence[str]) -> Plan:
    plan = Plan()
    for path in paths:
        suite = load_suite_file(path)
        if plan.suite(suite.name) is not None:
            raise ValueError(f"Suite '{suite.name}' is declared by more than one file")
        plan.suites.append(suite)
    return plan


def _parse_selectors(entry: Mapping[str, Any]) -> List[Selector]:
    from testbridge.core.selectors import SELECTOR_FACTORIES, GROUP_MATCHER, METHOD_NAME_FILTER

    selectors: List[Selector] = []
    groups = entry.get("groups")
    if groups:
        include = groups.get("include")
        exclude = groups.get("exclude")
        selectors.append(
            SELECTOR_FACTORIES[GROUP_MATCHER](
                include=",".join(include) if include else None,
                exclude=",".join(exclude) if exclude else None,
            )
        )
    methods = entry.get("methods")
    if methods:
        selectors.append(SELECTOR_FACTORIES[METHOD_NAME_FILTER](pattern=",".join(methods)))
    return selectors
