from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator

from .errors import EmptyInputError, ParseError
from .schemas import get_schemas

SUPPORTED_FORMATS = ('csv', 'json')

_SCHEMAS = get_schemas()
_ISSUE_LIST_VALIDATOR = Draft7Validator(_SCHEMAS['issue_list'])
_ISSUE_DOCUMENT_VALIDATOR = Draft7Validator(_SCHEMAS['issue_document'])


def _field_count_issue(line: int, expected: int, parsed: int) -> str:
    kind = 'Too few fields' if parsed < expected else 'Too many fields'
    return f'line {line}: {kind}: expected {expected} fields but parsed {parsed}'


def parse_csv(content: str) -> list[dict[str, Any]]:
    """Decode CSV text into records keyed by the header row.

    Lines that are completely empty are skipped. Rows that cannot be parsed
    (unbalanced quoting, wrong number of fields) fail the whole file and
    every problem found is listed in the ``ParseError``.
    """
    reader = csv.reader(io.StringIO(content.lstrip('\ufeff'), newline=''), strict=True)
    rows: list[tuple[int, list[str]]] = []
    problems: list[str] = []
    try:
        for row in reader:
            if not row:
                continue
            rows.append((reader.line_num, row))
    except csv.Error as exc:
        problems.append(f'line {reader.line_num}: {exc}')
    if not rows:
        if problems:
            raise ParseError(f'CSV parsing errors: {", ".join(problems)}')
        return []
    header = rows[0][1]
    records: list[dict[str, Any]] = []
    for line, row in rows[1:]:
        if len(row) != len(header):
            problems.append(_field_count_issue(line, len(header), len(row)))
            continue
        records.append(dict(zip(header, row)))
    if problems:
        raise ParseError(f'CSV parsing errors: {", ".join(problems)}')
    return records


def _decode_document(data: Any) -> list[dict[str, Any]]:
    # Two accepted shapes; anything else is rejected outright.
    if _ISSUE_LIST_VALIDATOR.is_valid(data):
        return list(data)
    if _ISSUE_DOCUMENT_VALIDATOR.is_valid(data):
        return list(data['issues'])
    raise ParseError(
        'Failed to parse JSON file: JSON file must contain an array of issues '
        'or an object with an "issues" array'
    )


def parse_json(content: str) -> list[dict[str, Any]]:
    try:
        data = json.loads(content.lstrip('\ufeff'))
    except json.JSONDecodeError as exc:
        raise ParseError(f'Failed to parse JSON file: {exc}') from exc
    return _decode_document(data)


def parse_records(content: str, fmt: str) -> list[dict[str, Any]]:
    """Turn raw file content into an ordered list of loosely-typed records."""
    tag = (fmt or '').strip().lower()
    if tag == 'csv':
        return parse_csv(content)
    if tag == 'json':
        return parse_json(content)
    raise ParseError(f'Unsupported file format {fmt!r}: file format must be either "csv" or "json"')


def load_records(path: str | Path, fmt: str) -> list[dict[str, Any]]:
    p = Path(path)
    if not p.is_file():
        raise ParseError(f'File not found: {p}')
    try:
        content = p.read_text(encoding='utf-8-sig')
    except UnicodeDecodeError as exc:
        raise ParseError(f'Failed to read {p}: {exc}') from exc
    records = parse_records(content, fmt)
    if not records:
        raise EmptyInputError()
    return records


__all__ = [
    'SUPPORTED_FORMATS',
    'ParseError',
    'parse_csv',
    'parse_json',
    'parse_records',
    'load_records',
]
