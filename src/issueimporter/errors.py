"""Error taxonomy & redaction helpers.

Every failure the importer raises on purpose derives from ``ImporterError``
so the CLI can report it uniformly. Remote failures are represented by
``issueimporter.github_rest.GitHubAPIError`` and are classified here for
logging; they are never raised out of the per-record pipeline.

Public API:
- classify_error(exc) -> ErrorInfo
- redact(text) -> str
"""
from __future__ import annotations

import re
from dataclasses import dataclass

_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"ghp_[A-Za-z0-9]{20,40}"),  # GitHub classic tokens
    re.compile(r"gh[osu]_[A-Za-z0-9]{20,40}"),  # OAuth / app installation tokens
    re.compile(r"github_pat_\w{20,}"),  # GitHub fine-grained tokens
    re.compile(r"(?i)bearer\s+[A-Za-z0-9_\-.]{20,}"),
]

_REDACTION_PLACEHOLDER = "<redacted>"

HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404
HTTP_UNPROCESSABLE = 422
HTTP_TOO_MANY_REQUESTS = 429


class ImporterError(RuntimeError):
    """Base class for errors raised deliberately by the importer."""


class ConfigError(ImporterError):
    pass


class ParseError(ImporterError):
    """The input file is malformed; nothing can be imported."""


class EmptyInputError(ParseError):
    def __init__(self, message: str = "No issues found in the input file") -> None:
        super().__init__(message)


class ValidationError(ImporterError):
    """A single record is structurally unusable."""

    def __init__(self, message: str, *, index: int) -> None:
        super().__init__(message)
        self.index = index


@dataclass
class ErrorInfo:
    category: str
    message: str
    original_type: str
    transient: bool = False


def redact(text: str) -> str:
    """Redact sensitive tokens in arbitrary text."""
    if not text:
        return text
    redacted = text
    for pat in _SENSITIVE_PATTERNS:
        redacted = pat.sub(_REDACTION_PLACEHOLDER, redacted)
    return redacted


def classify_error(exc: BaseException) -> ErrorInfo:
    """Best-effort classification of an exception.

    HTTP status (when the exception carries one) wins over message sniffing:
    - 429, or 403 mentioning a rate limit -> 'github.rate_limit', transient
    - 401 / other 403 -> 'github.auth'
    - 404 -> 'github.not_found'
    - 422 -> 'github.validation'
    - network-y keywords or a status-less remote error -> 'network', transient
    - ParseError -> 'parse'
    - Fallback -> 'generic'
    """
    msg = redact(str(exc) if exc else "")
    low = msg.lower()
    kind = exc.__class__.__name__
    status = getattr(exc, "status", None)

    if status == HTTP_TOO_MANY_REQUESTS or "rate limit" in low:
        return ErrorInfo("github.rate_limit", msg, kind, transient=True)
    if status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
        return ErrorInfo("github.auth", msg, kind)
    if status == HTTP_NOT_FOUND:
        return ErrorInfo("github.not_found", msg, kind)
    if status == HTTP_UNPROCESSABLE:
        return ErrorInfo("github.validation", msg, kind)
    if any(k in low for k in ("timeout", "timed out", "connection reset", "temporarily unavailable")):
        return ErrorInfo("network", msg, kind, transient=True)
    if isinstance(exc, ParseError):
        return ErrorInfo("parse", msg, kind)
    if hasattr(exc, "status") and status is None:
        return ErrorInfo("network", msg, kind, transient=True)
    return ErrorInfo("generic", msg, kind)


__all__ = [
    "ImporterError",
    "ConfigError",
    "ParseError",
    "EmptyInputError",
    "ValidationError",
    "ErrorInfo",
    "classify_error",
    "redact",
]
