"""issueimporter - import issues from CSV or JSON files into a GitHub repository.

High-level public API:

from issueimporter import GitHubRestClient, load_records, run_import

records = load_records('issues.csv', 'csv')
client = GitHubRestClient(token=token, repo='owner/repo')
report = run_import(records, client, dry_run=True)
print(report.summary.message)

The CLI (``issueimporter import``) delegates to the same functions.
"""

from __future__ import annotations

from .config import ImporterConfig, load_config
from .errors import ConfigError, EmptyInputError, ImporterError, ParseError, ValidationError
from .github_rest import GitHubAPIError, GitHubRestClient
from .models import (
    Created,
    DryRun,
    Failed,
    ImportOutcome,
    ImportReport,
    ImportSummary,
    NormalizedIssue,
)
from .orchestrator import FixedDelayPacer, ImportOrchestrator, run_import
from .parser import load_records, parse_records

__version__ = "0.1.0"

__all__ = [
    "ImporterConfig",
    "load_config",
    "ImporterError",
    "ConfigError",
    "ParseError",
    "EmptyInputError",
    "ValidationError",
    "GitHubAPIError",
    "GitHubRestClient",
    "Created",
    "DryRun",
    "Failed",
    "ImportOutcome",
    "ImportReport",
    "ImportSummary",
    "NormalizedIssue",
    "FixedDelayPacer",
    "ImportOrchestrator",
    "run_import",
    "load_records",
    "parse_records",
    "__version__",
]
