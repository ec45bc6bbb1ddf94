from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

RawRecord = Mapping[str, Any]
MilestoneMap = Mapping[str, int]

UNKNOWN_TITLE = "Unknown"


@dataclass(frozen=True)
class NormalizedIssue:
    """Creation-ready issue produced from one raw record.

    ``title`` is the only field guaranteed non-empty; assignees have been
    confirmed as collaborators (when a remote client was available) and
    ``milestone`` is the numeric identifier understood by the API.
    """

    title: str
    body: str = ""
    labels: tuple[str, ...] = field(default_factory=tuple)
    assignees: tuple[str, ...] = field(default_factory=tuple)
    milestone: int | None = None


@dataclass(frozen=True)
class Created:
    title: str
    number: int
    url: str | None = None

    status: ClassVar[str] = "created"
    succeeded: ClassVar[bool] = True

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "title": self.title, "number": self.number, "url": self.url}


@dataclass(frozen=True)
class DryRun:
    title: str

    status: ClassVar[str] = "dry-run"
    succeeded: ClassVar[bool] = True

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "title": self.title}


@dataclass(frozen=True)
class Failed:
    title: str
    error: str

    status: ClassVar[str] = "failed"
    succeeded: ClassVar[bool] = False

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "title": self.title, "error": self.error}


ImportOutcome = Union[Created, DryRun, Failed]


@dataclass(frozen=True)
class ImportSummary:
    success_count: int
    failure_count: int

    @property
    def message(self) -> str:
        return f"Import completed: {self.success_count} successful, {self.failure_count} failed"

    @classmethod
    def from_outcomes(cls, outcomes: list[ImportOutcome]) -> ImportSummary:
        successes = sum(1 for outcome in outcomes if outcome.succeeded)
        return cls(success_count=successes, failure_count=len(outcomes) - successes)


@dataclass
class ImportReport:
    """Result of one importer run: per-record outcomes plus aggregate counts."""

    outcomes: list[ImportOutcome]
    summary: ImportSummary
    dry_run: bool

    @property
    def failed(self) -> bool:
        # Dry runs never fail the run as a whole, whatever was rejected.
        return self.summary.failure_count > 0 and not self.dry_run

    def to_dict(self) -> dict[str, Any]:
        return {
            "dry_run": self.dry_run,
            "totals": {
                "successful": self.summary.success_count,
                "failed": self.summary.failure_count,
                "processed": len(self.outcomes),
            },
            "summary": self.summary.message,
            "results": [outcome.to_dict() for outcome in self.outcomes],
        }


__all__ = [
    "RawRecord",
    "MilestoneMap",
    "UNKNOWN_TITLE",
    "NormalizedIssue",
    "Created",
    "DryRun",
    "Failed",
    "ImportOutcome",
    "ImportSummary",
    "ImportReport",
]
