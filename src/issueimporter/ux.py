"""CLI output helpers: colored status lines and the per-record results block."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from .actions import group
from .models import ImportOutcome, ImportReport


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


STATUS_MARKERS = {
    "created": ("✓", Colors.GREEN),
    "dry-run": ("~", Colors.CYAN),
    "failed": ("✗", Colors.RED),
}


def _supports_color(stream: TextIO | None = None) -> bool:
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    return os.environ.get("TERM") != "dumb"


def colorize(text: str, color: str, bold: bool = False, stream: TextIO | None = None) -> str:
    """Apply color to text if terminal supports it."""
    if not _supports_color(stream):
        return text
    prefix = (Colors.BOLD if bold else "") + color
    return f"{prefix}{text}{Colors.RESET}"


def print_success(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    print(colorize("✓", Colors.GREEN, bold=True, stream=stream) + " " + message, file=stream)


def print_error(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stderr
    print(colorize("✗", Colors.RED, bold=True, stream=stream) + " " + message, file=stream)


def format_outcome(outcome: ImportOutcome, stream: TextIO | None = None) -> list[str]:
    marker, color = STATUS_MARKERS[outcome.status]
    number = getattr(outcome, "number", None)
    line = f"{colorize(marker, color, bold=True, stream=stream)} {outcome.title}"
    if number is not None:
        line += f" #{number}"
    elif outcome.status == "dry-run":
        line += " #DRY-RUN"
    lines = [line]
    error = getattr(outcome, "error", None)
    if error:
        lines.append(f"   Error: {error}")
    return lines


def print_report(report: ImportReport, stream: TextIO | None = None) -> None:
    """Print the grouped results block followed by the one-line summary."""
    stream = stream or sys.stdout
    if report.outcomes:
        with group("Import Results", stream=stream):
            for outcome in report.outcomes:
                for line in format_outcome(outcome, stream=stream):
                    print(line, file=stream)
    if report.failed:
        print_error(report.summary.message, stream=stream)
    else:
        print_success(report.summary.message, stream=stream)


__all__ = ["Colors", "colorize", "format_outcome", "print_error", "print_report", "print_success"]
