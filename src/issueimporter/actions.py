"""GitHub Actions integration: log groups and step outputs.

Outside Actions (``GITHUB_ACTIONS`` unset) groups degrade to a plain
heading and outputs are not written anywhere.
"""

from __future__ import annotations

import os
import sys
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from .models import ImportReport


def in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


@contextmanager
def group(title: str, stream: TextIO | None = None) -> Iterator[None]:
    stream = stream or sys.stdout
    if in_github_actions():
        print(f"::group::{title}", file=stream)
        try:
            yield
        finally:
            print("::endgroup::", file=stream)
    else:
        print(title, file=stream)
        yield


def set_outputs(values: Mapping[str, str], output_file: str | Path | None = None) -> bool:
    """Append ``name=value`` pairs to ``$GITHUB_OUTPUT``; False when unavailable."""
    target = output_file or os.environ.get("GITHUB_OUTPUT")
    if not target:
        return False
    with open(target, "a", encoding="utf-8") as fh:
        for name, value in values.items():
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
                fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                fh.write(f"{name}={value}\n")
    return True


def report_outputs(report: ImportReport) -> dict[str, str]:
    return {
        "issues-created": str(report.summary.success_count),
        "issues-failed": str(report.summary.failure_count),
        "summary": report.summary.message,
    }


__all__ = ["group", "in_github_actions", "report_outputs", "set_outputs"]
