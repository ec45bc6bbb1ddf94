from __future__ import annotations

import pytest

from issueimporter.errors import ValidationError
from issueimporter.models import NormalizedIssue
from issueimporter.validation import best_effort_title, validate_issue


def test_full_record_is_normalized(fake_github, recording_logger):
    fake_github.collaborators = {"alice"}
    record = {
        "title": "  Crash on start  ",
        "body": "Steps",
        "labels": "bug; p1",
        "assignees": "alice,bob",
        "milestone": "v1",
    }
    issue = validate_issue(record, 0, {"v1": 4}, client=fake_github, logger=recording_logger)
    assert issue == NormalizedIssue(
        title="Crash on start",
        body="Steps",
        labels=("bug", "p1"),
        assignees=("alice",),
        milestone=4,
    )


@pytest.mark.parametrize("title", [None, "", "   ", 42, ["T"]])
def test_missing_title_fails_before_remote_calls(title, fake_github, recording_logger):
    record = {"title": title, "assignees": "alice,bob", "milestone": "v1"}
    with pytest.raises(ValidationError, match="Issue at index 3 is missing a valid title") as excinfo:
        validate_issue(record, 3, {}, client=fake_github, logger=recording_logger)
    assert excinfo.value.index == 3
    assert fake_github.calls == []


def test_record_without_title_key(fake_github, recording_logger):
    with pytest.raises(ValidationError):
        validate_issue({"body": "x"}, 0, {}, client=fake_github, logger=recording_logger)


def test_body_falls_back_to_description(fake_github, recording_logger):
    issue = validate_issue(
        {"title": "T", "description": "From description"}, 0, {}, client=fake_github,
        logger=recording_logger,
    )
    assert issue.body == "From description"
    blank = validate_issue({"title": "T"}, 0, {}, client=fake_github, logger=recording_logger)
    assert blank.body == ""


def test_optional_fields_degrade_without_rejecting(fake_github, recording_logger):
    record = {"title": "T", "labels": 5, "assignees": "ghost", "milestone": "missing"}
    issue = validate_issue(record, 0, {}, client=fake_github, logger=recording_logger)
    assert issue.labels == ()
    assert issue.assignees == ()
    assert issue.milestone is None
    assert len(recording_logger.messages("warning")) == 2


def test_without_client_assignees_pass_unverified(recording_logger):
    issue = validate_issue({"title": "T", "assignees": "a;b"}, 0, {}, logger=recording_logger)
    assert issue.assignees == ("a", "b")


def test_best_effort_title():
    assert best_effort_title({"title": "Raw "}) == "Raw "
    assert best_effort_title({"title": ""}) == "Unknown"
    assert best_effort_title({}) == "Unknown"
    assert best_effort_title("not a record") == "Unknown"
