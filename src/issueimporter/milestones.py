"""Milestone lookup and resolution.

A milestone reference may be a number, a canonical integer literal (``"5"``)
or a milestone title. Integer literals are resolved before titles, so a
milestone literally named ``"5"`` can only be reached through its number.
"""

from __future__ import annotations

import numbers
import re
from typing import Any, Protocol

from .errors import redact
from .github_rest import GitHubAPIError
from .logging import StructuredLogger, get_logger
from .models import MilestoneMap

_INT_LITERAL = re.compile(r"-?\d+")


class MilestoneSource(Protocol):
    def list_milestones(self, *, state: str = "all") -> list[dict[str, Any]]: ...


def fetch_milestone_map(
    client: MilestoneSource, *, logger: StructuredLogger | None = None
) -> dict[str, int]:
    """Build a title -> number map from every milestone, open or closed.

    Milestones are best-effort: a failed lookup is logged and yields an
    empty map instead of aborting the run.
    """
    log = logger or get_logger()
    try:
        entries = client.list_milestones(state="all")
    except GitHubAPIError as exc:
        log.warning(f"Failed to fetch milestones: {redact(str(exc))}", status=exc.status)
        return {}
    mapping: dict[str, int] = {}
    for entry in entries:
        title = entry.get("title")
        number = entry.get("number")
        if isinstance(title, str) and isinstance(number, int):
            mapping[title] = number
    log.info(f"Found {len(mapping)} milestones in repository", milestone_count=len(mapping))
    return mapping


def _as_integer_literal(text: str) -> int | None:
    # Only canonical spellings count: "05" and " 5" are looked up as titles.
    if not _INT_LITERAL.fullmatch(text):
        return None
    value = int(text)
    return value if str(value) == text else None


def _as_milestone_number(value: numbers.Real, logger: StructuredLogger | None) -> int | None:
    # JSON may decode 5 as 5.0; milestone numbers themselves are whole.
    if isinstance(value, int) or float(value).is_integer():
        return int(value)
    (logger or get_logger()).warning(
        f"Milestone number {value} is not a whole number. "
        "Issue will be created without milestone.",
        milestone=str(value),
    )
    return None


def resolve_milestone(
    reference: Any,
    milestones: MilestoneMap,
    *,
    logger: StructuredLogger | None = None,
) -> int | None:
    if not reference:
        return None
    if isinstance(reference, numbers.Real) and not isinstance(reference, bool):
        return _as_milestone_number(reference, logger)
    text = str(reference)
    literal = _as_integer_literal(text)
    if literal is not None:
        return literal
    if text in milestones:
        return milestones[text]
    (logger or get_logger()).warning(
        f'Milestone "{text}" not found in repository. Issue will be created without milestone.',
        milestone=text,
    )
    return None


__all__ = ["MilestoneSource", "fetch_milestone_map", "resolve_milestone"]
