"""Numeric coercion and simple aggregates over row sets.

Values that cannot be read as a finite number are excluded from every
aggregate; they are never counted as zero.
"""

from __future__ import annotations

import math
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """Coerce a row value to a float, or None when it is not numeric.

    Examples:
        42 -> 42.0
        " 3.5 " -> 3.5
        "n/a", "", None, True, float("nan") -> None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_numeric_value(value: Any) -> bool:
    """True for real int/float values (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def column_values(rows: list[dict[str, Any]], column: str) -> list[float]:
    """Numeric values of ``column``, skipping absent and non-numeric entries."""
    values = []
    for row in rows:
        number = to_number(row.get(column))
        if number is not None:
            values.append(number)
    return values


def mean(values: list[float]) -> float:
    return sum(values) / len(values)


def format_number(value: float) -> str:
    return f"{value:.2f}"
