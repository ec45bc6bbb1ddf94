from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .assignees import CollaboratorChecker, validate_assignees
from .errors import ValidationError
from .logging import StructuredLogger
from .milestones import resolve_milestone
from .models import UNKNOWN_TITLE, MilestoneMap, NormalizedIssue, RawRecord
from .normalize import normalize_assignees, normalize_labels


def require_title(record: RawRecord, index: int) -> str:
    """Return the trimmed title or raise ``ValidationError``.

    Runs before any remote lookup so a record that can never be created
    costs no API calls.
    """
    title = record.get("title") if isinstance(record, Mapping) else None
    if not isinstance(title, str) or not title.strip():
        raise ValidationError(f"Issue at index {index} is missing a valid title", index=index)
    return title.strip()


def best_effort_title(record: Any) -> str:
    if isinstance(record, Mapping):
        title = record.get("title")
        if title:
            return str(title)
    return UNKNOWN_TITLE


def _body_of(record: RawRecord) -> str:
    body = record.get("body") or record.get("description") or ""
    return body if isinstance(body, str) else str(body)


def validate_issue(
    record: RawRecord,
    index: int,
    milestones: MilestoneMap,
    *,
    client: CollaboratorChecker | None = None,
    logger: StructuredLogger | None = None,
) -> NormalizedIssue:
    """Normalize one raw record into a creation-ready issue.

    Only a missing or blank title rejects the record. Labels, assignees and
    the milestone degrade to fewer/no values instead. Without a ``client``
    (dry run with no credentials) assignees are passed through unverified.
    """
    title = require_title(record, index)
    assignees = normalize_assignees(record.get("assignees"))
    if client is not None:
        assignees = validate_assignees(client, assignees, logger=logger)
    return NormalizedIssue(
        title=title,
        body=_body_of(record),
        labels=tuple(normalize_labels(record.get("labels"))),
        assignees=tuple(assignees),
        milestone=resolve_milestone(record.get("milestone"), milestones, logger=logger),
    )


__all__ = ["require_title", "best_effort_title", "validate_issue"]
