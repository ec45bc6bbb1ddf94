"""Issue creation (real or simulated) with remote failures as data.

``create_issue`` never raises for anything the API does: every remote
failure becomes a ``Failed`` outcome. Field-level validation errors from a
422 response are flattened into one readable message.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from .errors import classify_error, redact
from .github_rest import GitHubAPIError
from .logging import StructuredLogger, get_logger
from .models import Created, DryRun, Failed, ImportOutcome, NormalizedIssue

HTTP_UNPROCESSABLE = 422


class IssueCreatorClient(Protocol):
    def create_issue(
        self,
        *,
        title: str,
        body: str,
        labels: Iterable[str] | None = None,
        assignees: Iterable[str] | None = None,
        milestone: int | None = None,
    ) -> dict[str, Any]: ...


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts = [
        f"{err.get('field')}: {err.get('code')} - {err.get('message') or 'Validation failed'}"
        for err in errors
    ]
    return f"Validation Failed: {'; '.join(parts)}"


def _failure_message(exc: GitHubAPIError) -> str:
    if exc.status == HTTP_UNPROCESSABLE and exc.errors:
        return redact(format_validation_errors(exc.errors))
    return redact(str(exc))


def _log_dry_run(log: StructuredLogger, issue: NormalizedIssue) -> None:
    log.info(f'[DRY RUN] Would create issue: "{issue.title}"')
    log.info(f"  Labels: {', '.join(issue.labels) or 'None'}")
    log.info(f"  Assignees: {', '.join(issue.assignees) or 'None'}")
    log.info(f"  Milestone: {issue.milestone or 'None'}")
    log.log_issue_action("create", issue.title, dry_run=True)


def create_issue(
    client: IssueCreatorClient | None,
    issue: NormalizedIssue,
    dry_run: bool,
    *,
    logger: StructuredLogger | None = None,
) -> ImportOutcome:
    log = logger or get_logger()
    if dry_run:
        _log_dry_run(log, issue)
        return DryRun(title=issue.title)
    if client is None:
        raise ValueError("a remote client is required outside dry-run mode")
    try:
        data = client.create_issue(
            title=issue.title,
            body=issue.body,
            labels=issue.labels,
            assignees=issue.assignees,
            milestone=issue.milestone,
        )
    except GitHubAPIError as exc:
        message = _failure_message(exc)
        info = classify_error(exc)
        log.log_error(
            f'Failed to create issue "{issue.title}": {message}',
            error=message,
            category=info.category,
            transient=info.transient,
            status=exc.status,
        )
        if exc.documentation_url:
            log.error(f"See: {exc.documentation_url}", documentation_url=exc.documentation_url)
        return Failed(title=issue.title, error=message)
    number = data.get("number")
    if not isinstance(number, int):
        message = "GitHub API returned no issue number"
        log.log_error(f'Failed to create issue "{issue.title}": {message}', error=message)
        return Failed(title=issue.title, error=message)
    url = data.get("html_url")
    log.log_issue_action("create", issue.title, issue_number=number)
    return Created(title=issue.title, number=number, url=url if isinstance(url, str) else None)


__all__ = ["IssueCreatorClient", "create_issue", "format_validation_errors"]
