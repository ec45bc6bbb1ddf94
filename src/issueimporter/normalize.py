"""Coercion of multi-value record fields into canonical lists.

Spreadsheet exports disagree on separators, so string values accept commas
and semicolons interchangeably (``"a;b,c"`` -> ``["a", "b", "c"]``). List
values are only filtered: non-string and empty entries are dropped and the
rest are kept verbatim, untrimmed, in their original order.
"""

from __future__ import annotations

from typing import Any


def _split_multi_value(raw: Any) -> list[str]:
    if not raw:
        return []
    if isinstance(raw, str):
        pieces = raw.replace(";", ",").split(",")
        return [piece.strip() for piece in pieces if piece.strip()]
    if isinstance(raw, (list, tuple)):
        return [item for item in raw if isinstance(item, str) and item]
    return []


def normalize_labels(raw: Any) -> list[str]:
    return _split_multi_value(raw)


def normalize_assignees(raw: Any) -> list[str]:
    return _split_multi_value(raw)


__all__ = ["normalize_labels", "normalize_assignees"]
