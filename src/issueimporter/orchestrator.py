"""Sequential import pipeline: validate, create, record, pause.

Records are processed strictly one at a time in input order with at most
one request in flight. A rejected record becomes a ``Failed`` outcome and
the batch moves on; only the aggregate counts decide whether the run
failed.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from jsonschema import Draft7Validator

from .assignees import CollaboratorChecker
from .creator import IssueCreatorClient, create_issue
from .errors import ValidationError, redact
from .logging import StructuredLogger, get_logger
from .milestones import MilestoneSource, fetch_milestone_map
from .models import Failed, ImportOutcome, ImportReport, ImportSummary, MilestoneMap
from .observability import get_tracer
from .schemas import get_schemas
from .validation import best_effort_title, validate_issue

DEFAULT_REQUEST_DELAY = 0.1


class ImporterClient(MilestoneSource, CollaboratorChecker, IssueCreatorClient, Protocol):
    """Everything the pipeline needs from the remote tracker."""


@dataclass
class FixedDelayPacer:
    """Fixed pause between creations to stay under API rate limits."""

    delay_seconds: float = DEFAULT_REQUEST_DELAY
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def pause(self) -> None:
        if self.delay_seconds > 0:
            self.sleep(self.delay_seconds)


class ImportOrchestrator:
    def __init__(
        self,
        client: ImporterClient | None,
        *,
        dry_run: bool,
        pacer: FixedDelayPacer | None = None,
        logger: StructuredLogger | None = None,
    ) -> None:
        if client is None and not dry_run:
            raise ValueError("a remote client is required outside dry-run mode")
        self.client = client
        self.dry_run = dry_run
        self.pacer = pacer or FixedDelayPacer()
        self.logger = logger or get_logger()
        self._tracer = get_tracer()

    def load_milestones(self) -> dict[str, int]:
        if self.client is None:
            self.logger.warning("No GitHub client available; milestones resolve by number only")
            return {}
        with self.logger.timed_operation("milestone_fetch"):
            return fetch_milestone_map(self.client, logger=self.logger)

    def _reject(self, record: Any, exc: ValidationError) -> Failed:
        message = redact(str(exc))
        self.logger.log_error(
            f"Failed to process issue at index {exc.index}: {message}",
            error=message,
            index=exc.index,
        )
        return Failed(title=best_effort_title(record), error=message)

    def process_record(
        self, record: Any, index: int, milestones: MilestoneMap
    ) -> tuple[ImportOutcome, bool]:
        """Return the record's outcome and whether a creation was attempted."""
        with self._tracer.start_as_current_span("issueimporter.record") as span:
            span.set_attribute("issueimporter.index", index)
            try:
                issue = validate_issue(
                    record, index, milestones, client=self.client, logger=self.logger
                )
            except ValidationError as exc:
                outcome: ImportOutcome = self._reject(record, exc)
                span.set_attribute("issueimporter.status", outcome.status)
                return outcome, False
            outcome = create_issue(self.client, issue, self.dry_run, logger=self.logger)
            span.set_attribute("issueimporter.status", outcome.status)
            return outcome, True

    def run(self, records: Sequence[Any], milestones: MilestoneMap | None = None) -> ImportReport:
        with self._tracer.start_as_current_span("issueimporter.import") as span:
            span.set_attribute("issueimporter.dry_run", self.dry_run)
            span.set_attribute("issueimporter.record_count", len(records))
            if milestones is None:
                milestones = self.load_milestones()
            outcomes: list[ImportOutcome] = []
            last = len(records) - 1
            for index, record in enumerate(records):
                outcome, attempted = self.process_record(record, index, milestones)
                outcomes.append(outcome)
                if attempted and not self.dry_run and index < last:
                    self.pacer.pause()
            summary = ImportSummary.from_outcomes(outcomes)
            span.set_attribute("issueimporter.successful", summary.success_count)
            span.set_attribute("issueimporter.failed", summary.failure_count)
            self.logger.info(
                summary.message,
                successful=summary.success_count,
                failed=summary.failure_count,
            )
            return ImportReport(outcomes=outcomes, summary=summary, dry_run=self.dry_run)


def run_import(
    records: Sequence[Any],
    client: ImporterClient | None,
    *,
    dry_run: bool = False,
    milestones: MilestoneMap | None = None,
    pacer: FixedDelayPacer | None = None,
    logger: StructuredLogger | None = None,
) -> ImportReport:
    orchestrator = ImportOrchestrator(client, dry_run=dry_run, pacer=pacer, logger=logger)
    return orchestrator.run(records, milestones)


def build_summary_document(report: ImportReport) -> dict[str, Any]:
    document: dict[str, Any] = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        **report.to_dict(),
    }
    Draft7Validator(get_schemas()["summary"]).validate(document)
    return document


def write_summary_json(report: ImportReport, path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(build_summary_document(report), indent=2) + "\n", encoding="utf-8")
    return target


__all__ = [
    "ImporterClient",
    "FixedDelayPacer",
    "ImportOrchestrator",
    "run_import",
    "build_summary_document",
    "write_summary_json",
]
