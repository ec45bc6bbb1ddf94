from __future__ import annotations

import io
from pathlib import Path

from issueimporter.actions import group, in_github_actions, report_outputs, set_outputs
from issueimporter.models import Created, Failed, ImportReport, ImportSummary


def _report() -> ImportReport:
    outcomes = [Created(title="A", number=1), Failed(title="B", error="boom")]
    return ImportReport(outcomes=outcomes, summary=ImportSummary.from_outcomes(outcomes), dry_run=False)


def test_report_outputs():
    assert report_outputs(_report()) == {
        "issues-created": "1",
        "issues-failed": "1",
        "summary": "Import completed: 1 successful, 1 failed",
    }


def test_set_outputs_appends_to_github_output(tmp_path: Path, monkeypatch):
    target = tmp_path / "output.txt"
    target.write_text("existing=1\n")
    monkeypatch.setenv("GITHUB_OUTPUT", str(target))
    assert set_outputs({"issues-created": "2", "notes": "line one\nline two"}) is True
    content = target.read_text()
    assert content.startswith("existing=1\nissues-created=2\n")
    assert "notes<<ghadelimiter_" in content
    assert "line one\nline two\n" in content


def test_set_outputs_without_target():
    assert set_outputs({"issues-created": "2"}) is False


def test_group_markers_only_inside_actions(monkeypatch):
    plain = io.StringIO()
    with group("Import Results", stream=plain):
        print("row", file=plain)
    assert plain.getvalue() == "Import Results\nrow\n"

    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    assert in_github_actions()
    wrapped = io.StringIO()
    with group("Import Results", stream=wrapped):
        print("row", file=wrapped)
    assert wrapped.getvalue() == "::group::Import Results\nrow\n::endgroup::\n"
