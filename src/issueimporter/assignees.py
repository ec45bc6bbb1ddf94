from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .errors import redact
from .github_rest import GitHubAPIError
from .logging import StructuredLogger, get_logger


class CollaboratorChecker(Protocol):
    def check_collaborator(self, username: str) -> None: ...


def validate_assignees(
    client: CollaboratorChecker,
    candidates: Sequence[str] | None,
    *,
    logger: StructuredLogger | None = None,
) -> list[str]:
    """Keep only candidates the repository confirms as collaborators.

    One collaborator check per candidate, in order. Rejected or unverifiable
    users are dropped with a warning; the record itself never fails here.
    """
    if not candidates:
        return []
    log = logger or get_logger()
    valid: list[str] = []
    for username in candidates:
        try:
            client.check_collaborator(username)
        except GitHubAPIError as exc:
            if exc.not_found:
                log.warning(
                    f"Assignee '{username}' is not a collaborator of this repository. Skipping.",
                    assignee=username,
                )
            else:
                log.warning(
                    f"Could not validate assignee '{username}': {redact(str(exc))}. Skipping.",
                    assignee=username,
                    status=exc.status,
                )
            continue
        valid.append(username)
        log.debug(f"Assignee '{username}' is valid", assignee=username)
    return valid


__all__ = ["CollaboratorChecker", "validate_assignees"]
