"""Coercion of loosely typed spreadsheet cells into comparable values."""

import math
import re
from collections.abc import Mapping
from typing import Any

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_number(text: str) -> float | None:
    """Leading decimal of ``text`` after cleaning, or ``None`` when there is none."""

    match = _LEADING_FLOAT.match(_NON_NUMERIC.sub("", text))
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def to_number(value: Any) -> float:
    """Return ``value`` as a finite float, or ``0.0`` when it cannot be read.

    Strings are stripped of everything except digits, ``.`` and ``-`` and the
    longest leading decimal is parsed, so ``"1,250 USD"`` becomes ``1250.0``
    and ``"N/A"`` becomes ``0.0``.
    """

    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    if not isinstance(value, str):
        return 0.0

    number = parse_number(value)
    return 0.0 if number is None else number


def to_text(value: Any) -> str:
    """Render a cell as text; blanks become ``""`` and ``410.0`` becomes ``"410"``."""

    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def get_row_value(row: Mapping[str, Any], *possible_keys: str) -> str:
    """Look up the first matching header among ``possible_keys``.

    For each candidate an exact header match wins, then a case-insensitive
    one. Missing columns yield an empty string.
    """

    for key in possible_keys:
        if key in row and row[key] is not None:
            return to_text(row[key])
        lowered = key.lower()
        for header in row:
            if header.lower() == lowered and row[header] is not None:
                return to_text(row[header])
    return ""
