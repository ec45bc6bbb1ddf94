"""Pytest configuration for issueimporter tests.

Ensures the in-repo `src` directory is on `sys.path` so the package can be
imported without an editable install, and provides an in-memory GitHub
double plus a logger that records what the pipeline reports.
"""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from issueimporter.github_rest import GitHubAPIError  # noqa: E402
from issueimporter.logging import StructuredLogger  # noqa: E402


class FakeGitHub:
    """In-memory stand-in for ``GitHubRestClient`` that logs every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.milestones: list[dict[str, Any]] = []
        self.milestone_error: GitHubAPIError | None = None
        self.collaborators: set[str] = set()
        self.collaborator_errors: dict[str, GitHubAPIError] = {}
        self.create_errors: dict[str, GitHubAPIError] = {}
        self._next_number = 1

    def list_milestones(self, *, state: str = "all") -> list[dict[str, Any]]:
        self.calls.append(("list_milestones", state))
        if self.milestone_error is not None:
            raise self.milestone_error
        return list(self.milestones)

    def check_collaborator(self, username: str) -> None:
        self.calls.append(("check_collaborator", username))
        if username in self.collaborator_errors:
            raise self.collaborator_errors[username]
        if username not in self.collaborators:
            raise GitHubAPIError(
                f"GitHub API GET /collaborators/{username} failed with 404: Not Found",
                status=404,
            )

    def create_issue(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("create_issue", kwargs))
        title = kwargs["title"]
        if title in self.create_errors:
            raise self.create_errors[title]
        number = self._next_number
        self._next_number += 1
        return {"number": number, "html_url": f"https://github.com/acme/widgets/issues/{number}"}

    def calls_named(self, name: str) -> list[Any]:
        return [args for call, args in self.calls if call == name]


class RecordingLogger(StructuredLogger):
    """StructuredLogger that keeps (level, message, extras) tuples in memory."""

    def __init__(self) -> None:
        super().__init__(name="issueimporter.test", level="DEBUG", stream=io.StringIO())
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, message: str, **kw: Any) -> None:
        self.records.append(("debug", message, kw))

    def info(self, message: str, **kw: Any) -> None:
        self.records.append(("info", message, kw))

    def warning(self, message: str, **kw: Any) -> None:
        self.records.append(("warning", message, kw))

    def error(self, message: str, **kw: Any) -> None:
        self.records.append(("error", message, kw))

    def log_error(self, message: str, error: str | None = None, **kw: Any) -> None:
        self.records.append(("error", message, {"error": error, **kw}))

    def log_issue_action(
        self,
        action: str,
        title: str,
        issue_number: int | None = None,
        dry_run: bool = False,
        **kw: Any,
    ) -> None:
        self.records.append(
            ("action", action, {"title": title, "issue_number": issue_number, "dry_run": dry_run})
        )

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GITHUB_ACTIONS",
        "GITHUB_OUTPUT",
        "GITHUB_REPOSITORY",
        "ISSUEIMPORTER_GITHUB_TOKEN",
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GITHUB_ACCESS_TOKEN",
        "GITHUB_PAT",
        "ISSUEIMPORTER_QUIET",
    ):
        # setenv first so values loaded from .env files are undone on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
