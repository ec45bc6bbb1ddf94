import io

from issueimporter.models import Created, DryRun, Failed, ImportReport, ImportSummary
from issueimporter.ux import format_outcome, print_report


def test_format_outcome_marks_each_status():
    stream = io.StringIO()
    assert format_outcome(Created(title="A", number=4), stream=stream) == ["✓ A #4"]
    assert format_outcome(DryRun(title="B"), stream=stream) == ["~ B #DRY-RUN"]
    assert format_outcome(Failed(title="C", error="boom"), stream=stream) == [
        "✗ C",
        "   Error: boom",
    ]


def test_print_report_dry_run_block():
    outcomes = [DryRun(title="A"), Failed(title="Unknown", error="missing title")]
    report = ImportReport(
        outcomes=outcomes, summary=ImportSummary.from_outcomes(outcomes), dry_run=True
    )
    stream = io.StringIO()
    print_report(report, stream=stream)
    out = stream.getvalue()
    assert "Import Results" in out
    assert "~ A #DRY-RUN" in out
    assert "Import completed: 1 successful, 1 failed" in out
