"""Chart projection of query results."""

from __future__ import annotations

from collections import Counter
import logging
from typing import Any, Optional

from ..core.models import MAX_CHART_POINTS, ChartPayload, ChartPoint
from ..domain import Intent, classify_intent
from ..domain.intent import DEFAULT_METRIC
from .numeric import is_numeric_value, to_number

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"
OTHER_LABEL = "Other"

Rows = list[dict[str, Any]]


def _label(value: Any) -> str:
    if value is None or value == "":
        return UNKNOWN_LABEL
    return str(value)


def numeric_columns(rows: Rows) -> list[str]:
    """Columns, in schema order, whose non-null values are all numbers."""
    columns = []
    for column in rows[0].keys():
        values = [row.get(column) for row in rows if row.get(column) is not None]
        if values and all(is_numeric_value(v) for v in values):
            columns.append(column)
    return columns


def pick_x_column(columns: list[str]) -> str:
    """Prefer campaign_type, then the first date-like column, then campaign_id."""
    if "campaign_type" in columns:
        return "campaign_type"
    return next((c for c in columns if "date" in c.lower()), "campaign_id")


def channel_pie(rows: Rows) -> ChartPayload:
    """One slice per channel, sized by the number of campaigns using it."""
    counts = Counter(_label(row.get("channel_used")) for row in rows)
    slices = list(counts.items())

    # Fold the tail into one slice so every row is still counted once
    if len(slices) > MAX_CHART_POINTS:
        head = slices[: MAX_CHART_POINTS - 1]
        rest = sum(count for _, count in slices[MAX_CHART_POINTS - 1:])
        slices = head + [(OTHER_LABEL, rest)]

    points = [ChartPoint(x=channel, y=count, label=channel) for channel, count in slices]
    return ChartPayload(kind="pie", points=points, labels=[channel for channel, _ in slices])


def metric_bar(rows: Rows, y_column: str) -> Optional[ChartPayload]:
    """Bar per campaign for ``y_column``, falling back to any numeric column."""
    columns = list(rows[0].keys())

    if y_column not in columns:
        candidates = numeric_columns(rows)
        if not candidates:
            logger.info(f"No numeric column to chart (wanted {y_column})")
            return None
        logger.debug(f"Column {y_column} not in results, charting {candidates[0]}")
        y_column = candidates[0]

    x_column = pick_x_column(columns)
    points = []
    for row in rows[:MAX_CHART_POINTS]:
        label = _label(row.get(x_column))
        y = to_number(row.get(y_column))
        points.append(ChartPoint(x=label, y=y if y is not None else 0, label=label))

    return ChartPayload(kind="bar", points=points, labels=[p.label for p in points])


def project(rows: Rows, message: str, intent: Intent | None = None) -> Optional[ChartPayload]:
    """Build a chart for ``rows``, or None when there is nothing to plot."""
    if not rows:
        return None

    intent = intent or classify_intent(message)
    if intent.by_channel:
        return channel_pie(rows)
    return metric_bar(rows, intent.metric or DEFAULT_METRIC)
