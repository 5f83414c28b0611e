"""JSON schema definition for listener output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

STATUSES = ["passed", "failed", "skipped", "config-before", "config-after"]

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "testbridge report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "results"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["run", "total", "passed", "failed", "skipped", "configuration_failures", "duration_s"],
            "properties": {
                "run": {"type": "string"},
                "total": {"type": "integer"},
                "passed": {"type": "integer"},
                "failed": {"type": "integer"},
                "skipped": {"type": "integer"},
                "configuration_failures": {"type": "integer"},
                "duration_s": {"type": "number"},
            },
        },
        "results": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "class", "method", "status", "duration_ms"],
                "properties": {
                    "id": {"type": "string"},
                    "class": {"type": "string"},
                    "method": {"type": "string"},
                    "status": {"type": "string", "enum": STATUSES},
                    "duration_ms": {"type": ["integer", "null"]},
                    "group": {"type": ["string", "null"]},
                    "run": {"type": "string"},
                    "message": {"type": "string"},
                    "error_type": {"type": "string"},
                },
            },
        },
    },
}
