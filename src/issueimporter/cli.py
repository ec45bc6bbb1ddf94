"""issueimporter CLI.

Subcommands:
  import    -> create one issue per CSV/JSON record (or simulate with --dry-run)
  validate  -> parse the file and check titles locally (no API calls)
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Any

from issueimporter.actions import report_outputs, set_outputs
from issueimporter.config import ImporterConfig, load_config, normalize_format
from issueimporter.env_auth import EnvAuthConfig, create_env_auth_manager
from issueimporter.errors import ConfigError, ImporterError, ValidationError
from issueimporter.github_rest import GitHubRestClient
from issueimporter.logging import StructuredLogger, configure_logging
from issueimporter.observability import configure_telemetry
from issueimporter.orchestrator import FixedDelayPacer, run_import, write_summary_json
from issueimporter.parser import SUPPORTED_FORMATS, load_records
from issueimporter.ux import print_error, print_report, print_success
from issueimporter.validation import require_title

_MAX_HELP_WIDTH = 100


class _HelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog: str) -> None:
        super().__init__(prog, max_help_position=30, width=_MAX_HELP_WIDTH)


class _FormatterArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("formatter_class", _HelpFormatter)
        super().__init__(*args, **kwargs)


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--file", dest="file_path", help="CSV or JSON file containing issues")
    parser.add_argument(
        "--format",
        dest="file_format",
        type=str.lower,
        choices=SUPPORTED_FORMATS,
        help="Format of the input file",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = _FormatterArgumentParser(
        prog="issueimporter", description="Import issues from CSV or JSON files into GitHub"
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors (env: ISSUEIMPORTER_QUIET=1)",
    )
    sub = p.add_subparsers(
        dest="cmd",
        required=True,
        parser_class=_FormatterArgumentParser,
        metavar="<command>",
    )

    pi = sub.add_parser("import", help="Create issues from the input file")
    _add_source_args(pi)
    pi.add_argument("--repo", help="Target repository (owner/repo); defaults to GITHUB_REPOSITORY")
    pi.add_argument("--token", help="GitHub token (defaults to GITHUB_TOKEN / GH_TOKEN / .env)")
    pi.add_argument("--dry-run", action="store_true", default=None)
    pi.add_argument("--delay-ms", type=int, help="Pause between creations (default 100)")
    pi.add_argument("--summary-json", help="Write a JSON summary of the run to this path")
    pi.add_argument("--json-logs", action="store_true", default=None)
    pi.add_argument("--log-level")

    pv = sub.add_parser("validate", help="Parse the input file and check titles locally")
    _add_source_args(pv)
    return p


def prepare_config(args: argparse.Namespace) -> ImporterConfig:
    """Load the optional config file and apply command-line overrides."""
    cfg = load_config(args.config)
    if args.file_path:
        cfg.source_file = Path(args.file_path)
    if args.file_format:
        cfg.file_format = normalize_format(args.file_format)
    if getattr(args, "repo", None):
        cfg.github_repo = args.repo
    if getattr(args, "dry_run", None):
        cfg.dry_run = True
    if getattr(args, "delay_ms", None) is not None:
        cfg.request_delay_ms = args.delay_ms
    if getattr(args, "summary_json", None):
        cfg.summary_json = Path(args.summary_json)
    if getattr(args, "json_logs", None):
        cfg.logging_json_enabled = True
    if getattr(args, "log_level", None):
        cfg.logging_level = args.log_level
    if args.quiet:
        cfg.logging_level = "WARNING"
    if cfg.source_file is None:
        raise ConfigError("No input file given; pass --file or set source.file in the config")
    return cfg


def _build_client(cfg: ImporterConfig, token: str | None) -> GitHubRestClient | None:
    if not token:
        return None
    if not cfg.github_repo:
        raise ConfigError("Target repository not set; pass --repo or set GITHUB_REPOSITORY")
    return GitHubRestClient(token=token, repo=cfg.github_repo, base_url=cfg.api_url)


def _cmd_import(cfg: ImporterConfig, args: argparse.Namespace, logger: StructuredLogger) -> int:
    assert cfg.source_file is not None  # nosec B101 - enforced by prepare_config
    auth = create_env_auth_manager(
        EnvAuthConfig(load_dotenv=cfg.env_auth_load_dotenv, dotenv_path=cfg.env_auth_dotenv_path)
    )
    token = auth.get_github_token(args.token)
    if not token and not cfg.dry_run:
        hints = "; ".join(auth.get_authentication_recommendations())
        raise ConfigError(f"GitHub token not found. {hints}")
    client = _build_client(cfg, token)

    logger.info(
        f"Starting issue import from {cfg.file_format.upper()} file: {cfg.source_file}",
        repo=cfg.github_repo,
    )
    if cfg.dry_run:
        logger.info("Running in DRY RUN mode - no issues will be created")
    records = load_records(cfg.source_file, cfg.file_format)
    logger.info(f"Found {len(records)} issues to import", record_count=len(records))

    report = run_import(
        records,
        client,
        dry_run=cfg.dry_run,
        pacer=FixedDelayPacer(cfg.request_delay_seconds),
        logger=logger,
    )
    print_report(report)
    set_outputs(report_outputs(report))
    if cfg.summary_json is not None:
        write_summary_json(report, cfg.summary_json)
        logger.debug(f"Summary written to {cfg.summary_json}")
    if report.failed:
        logger.error(f"{report.summary.failure_count} issues failed to import")
        return 1
    return 0


def _cmd_validate(cfg: ImporterConfig) -> int:
    assert cfg.source_file is not None  # nosec B101 - enforced by prepare_config
    records = load_records(cfg.source_file, cfg.file_format)
    problems: list[str] = []
    for index, record in enumerate(records):
        try:
            require_title(record, index)
        except ValidationError as exc:
            problems.append(str(exc))
    for problem in problems:
        print_error(problem)
    if problems:
        return 1
    print_success(f"{len(records)} issues ready to import from {cfg.source_file}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.quiet and os.environ.get("ISSUEIMPORTER_QUIET") == "1":
        args.quiet = True
    try:
        cfg = prepare_config(args)
        logger = configure_logging(
            json_logging=cfg.logging_json_enabled, level=cfg.logging_level
        )
        if cfg.telemetry_enabled:
            configure_telemetry(service_name=cfg.telemetry_service_name)
        if args.cmd == "validate":
            return _cmd_validate(cfg)
        return _cmd_import(cfg, args, logger)
    except ImporterError as exc:
        print_error(f"Action failed: {exc}")
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
