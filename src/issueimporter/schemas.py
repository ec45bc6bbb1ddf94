"""JSON Schemas for the JSON input document and the summary artifact.

The input schemas describe the two accepted document shapes (a bare array
of issue objects, or an object wrapping that array under ``issues``); record
contents are deliberately left open because field validation happens per
record later in the pipeline.
"""

from __future__ import annotations

from typing import Any

SCHEMA_KEY = "$schema"
SCHEMA_URL = "http://json-schema.org/draft-07/schema#"

_RECORD_LIST: dict[str, Any] = {"type": "array", "items": {"type": "object"}}


def get_schemas() -> dict[str, Any]:
    """Return a mapping of schema name -> JSON Schema dictionary.

    Keys:
        issue_list:     Input document that is a bare array of issue objects.
        issue_document: Input document wrapping the array under ``issues``.
        summary:        The ``--summary-json`` artifact written after a run.
    """
    issue_list: dict[str, Any] = {
        SCHEMA_KEY: SCHEMA_URL,
        "title": "IssueList",
        **_RECORD_LIST,
    }
    issue_document: dict[str, Any] = {
        SCHEMA_KEY: SCHEMA_URL,
        "title": "IssueDocument",
        "type": "object",
        "required": ["issues"],
        "properties": {"issues": _RECORD_LIST},
    }
    summary: dict[str, Any] = {
        SCHEMA_KEY: SCHEMA_URL,
        "title": "ImportSummary",
        "type": "object",
        "required": ["generated_at", "dry_run", "totals", "summary", "results"],
        "properties": {
            "generated_at": {"type": "string"},
            "dry_run": {"type": "boolean"},
            "summary": {"type": "string"},
            "totals": {
                "type": "object",
                "required": ["successful", "failed", "processed"],
                "properties": {
                    "successful": {"type": "integer", "minimum": 0},
                    "failed": {"type": "integer", "minimum": 0},
                    "processed": {"type": "integer", "minimum": 0},
                },
            },
            "results": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["status", "title"],
                    "properties": {
                        "status": {"enum": ["created", "dry-run", "failed"]},
                        "title": {"type": "string"},
                        "number": {"type": "integer"},
                        "url": {"type": ["string", "null"]},
                        "error": {"type": "string"},
                    },
                },
            },
        },
    }
    return {"issue_list": issue_list, "issue_document": issue_document, "summary": summary}


__all__ = ["get_schemas", "SCHEMA_URL"]
