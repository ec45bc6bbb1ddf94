from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from issueimporter import cli

CSV_WITH_GAP = textwrap.dedent(
    """\
    title,body,labels,assignees,milestone
    "First issue","Body one","bug;ui","alice",""
    "","Missing title","","",""
    "Third issue","Body three","enhancement","","v1"
    """
)


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "issues.csv").write_text(CSV_WITH_GAP, encoding="utf-8")
    return tmp_path


def test_dry_run_without_token_succeeds(workspace, capsys):
    code = cli.main(["import", "--file", "issues.csv", "--format", "csv", "--dry-run"])
    out = capsys.readouterr().out
    assert code == 0
    assert "[DRY RUN] Would create issue: \"First issue\"" in out
    assert "Import Results" in out
    assert "Import completed: 2 successful, 1 failed" in out
    assert "Issue at index 1 is missing a valid title" in out


def test_real_run_with_failures_exits_non_zero(workspace, capsys, monkeypatch, fake_github):
    fake_github.collaborators = {"alice"}
    fake_github.milestones = [{"title": "v1", "number": 4}]
    monkeypatch.setattr(cli, "GitHubRestClient", lambda **kwargs: fake_github)
    monkeypatch.setenv("GITHUB_TOKEN", "tkn")
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    output_file = workspace / "gh_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    code = cli.main(
        ["import", "--file", "issues.csv", "--format", "CSV", "--repo", "acme/widgets",
         "--delay-ms", "0"]
    )
    out = capsys.readouterr().out

    assert code == 1
    assert "::group::Import Results" in out
    assert "First issue #1" in out
    created = fake_github.calls_named("create_issue")
    assert [c["title"] for c in created] == ["First issue", "Third issue"]
    assert created[0]["labels"] == ("bug", "ui")
    assert created[1]["milestone"] == 4
    outputs = output_file.read_text()
    assert "issues-created=2\n" in outputs
    assert "issues-failed=1\n" in outputs
    assert "summary=Import completed: 2 successful, 1 failed\n" in outputs


def test_clean_run_exits_zero_and_writes_summary(tmp_path, capsys, monkeypatch, fake_github):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "issues.json").write_text(json.dumps({"issues": [{"title": "Only"}]}))
    monkeypatch.setattr(cli, "GitHubRestClient", lambda **kwargs: fake_github)
    code = cli.main(
        ["import", "--file", "issues.json", "--format", "json", "--repo", "acme/widgets",
         "--token", "explicit", "--summary-json", "summary.json"]
    )
    capsys.readouterr()
    assert code == 0
    summary = json.loads((tmp_path / "summary.json").read_text())
    assert summary["totals"] == {"successful": 1, "failed": 0, "processed": 1}
    assert summary["results"][0]["number"] == 1


def test_missing_token_outside_dry_run(workspace, capsys):
    code = cli.main(["import", "--file", "issues.csv", "--format", "csv"])
    err = capsys.readouterr().err
    assert code == 1
    assert "GitHub token not found" in err


def test_token_without_repository(workspace, capsys, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "tkn")
    code = cli.main(["import", "--file", "issues.csv", "--format", "csv", "--dry-run"])
    assert code == 1
    assert "Target repository not set" in capsys.readouterr().err


def test_parse_errors_abort_before_any_record(workspace, capsys, monkeypatch, fake_github):
    (workspace / "broken.csv").write_text('title,body\n"Unclosed,body\n')
    monkeypatch.setattr(cli, "GitHubRestClient", lambda **kwargs: fake_github)
    monkeypatch.setenv("GITHUB_TOKEN", "tkn")
    code = cli.main(["import", "--file", "broken.csv", "--format", "csv", "--repo", "a/b"])
    assert code == 1
    assert "CSV parsing errors" in capsys.readouterr().err
    assert fake_github.calls == []


def test_undecodable_file_reports_action_failure(workspace, capsys):
    (workspace / "latin.csv").write_bytes(b"title\n\xff\xfeBad\n")
    code = cli.main(["import", "--file", "latin.csv", "--format", "csv", "--dry-run"])
    assert code == 1
    assert "Action failed: Failed to read" in capsys.readouterr().err


def test_missing_file_argument(workspace, capsys):
    assert cli.main(["import", "--format", "csv", "--dry-run"]) == 1
    assert "No input file given" in capsys.readouterr().err


def test_unknown_format_rejected_by_argparse(workspace):
    with pytest.raises(SystemExit):
        cli.main(["import", "--file", "issues.csv", "--format", "xlsx"])


def test_config_file_supplies_source(workspace, capsys):
    (workspace / "importer.yaml").write_text(
        "source:\n  file: issues.csv\n  format: csv\nbehavior:\n  dry_run: true\n"
    )
    assert cli.main(["import", "--config", "importer.yaml"]) == 0
    assert "Import completed: 2 successful, 1 failed" in capsys.readouterr().out


def test_validate_reports_rejected_records(workspace, capsys):
    assert cli.main(["validate", "--file", "issues.csv", "--format", "csv"]) == 1
    assert "Issue at index 1 is missing a valid title" in capsys.readouterr().err


def test_validate_accepts_clean_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "issues.json").write_text('[{"title": "A"}, {"title": "B"}]')
    assert cli.main(["validate", "--file", "issues.json", "--format", "json"]) == 0
    assert "2 issues ready to import" in capsys.readouterr().out
