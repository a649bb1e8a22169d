"""Templated text summaries of query results."""

from __future__ import annotations

from collections import Counter
import logging
from typing import Any, Callable, Optional

from ..domain import Intent, Topic, classify_intent
from .numeric import column_values, format_number, mean, to_number

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "I couldn't find any data matching your query. Please try a different question."

EXAMPLE_QUESTIONS = [
    "What's the average ROI?",
    "Which channel performs best?",
    "Show me conversion rates",
]

Rows = list[dict[str, Any]]


def _count(rows: Rows) -> str:
    return (
        f"I found {len(rows)} marketing campaigns in the database. "
        "The chart below shows the distribution of the data."
    )


def _roi(rows: Rows) -> Optional[str]:
    values = column_values(rows, "roi")
    if not values:
        return None
    return (
        f"Based on {len(rows)} campaigns:\n"
        f"• Average ROI: {format_number(mean(values))}%\n"
        f"• Highest ROI: {format_number(max(values))}%\n"
        f"• Lowest ROI: {format_number(min(values))}%\n\n"
        "The chart below visualizes the ROI trends."
    )


def _conversion(rows: Rows) -> Optional[str]:
    values = column_values(rows, "conversion_rate")
    if not values:
        return None
    return (
        f"Conversion rate analysis from {len(rows)} campaigns:\n"
        f"• Average conversion rate: {format_number(mean(values))}%\n"
        f"• Best performing: {format_number(max(values))}%\n\n"
        "See the chart below for detailed trends."
    )


def _cost(rows: Rows) -> Optional[str]:
    values = column_values(rows, "acquisition_cost")
    if not values:
        return None
    return (
        f"Cost analysis from {len(rows)} campaigns:\n"
        f"• Average acquisition cost: ${format_number(mean(values))}\n"
        f"• Total cost: ${format_number(sum(values))}\n\n"
        "The chart shows cost distribution across campaigns."
    )


def _engagement(rows: Rows) -> Optional[str]:
    values = column_values(rows, "engagement_score")
    if not values:
        return None
    return (
        f"Engagement analysis from {len(rows)} campaigns:\n"
        f"• Average engagement score: {format_number(mean(values))}\n\n"
        "The chart below shows engagement patterns."
    )


def _channel(rows: Rows) -> Optional[str]:
    # Counter keeps first-seen order, so most_common breaks ties by it
    counts = Counter(str(row["channel_used"]) for row in rows if row.get("channel_used"))
    if not counts:
        return None
    channel, used = counts.most_common(1)[0]
    return (
        f"Channel analysis from {len(rows)} campaigns:\n"
        f"• Most used channel: {channel} ({used} campaigns)\n"
        f"• Total channels: {len(counts)}\n\n"
        "The chart shows channel distribution."
    )


def top_campaign(rows: Rows) -> Optional[tuple[dict[str, Any], float]]:
    """Row with the highest numeric ROI; the first one wins a tie."""
    best: Optional[tuple[dict[str, Any], float]] = None
    for row in rows:
        roi = to_number(row.get("roi"))
        if roi is None:
            continue
        if best is None or roi > best[1]:
            best = (row, roi)
    return best


def _top(rows: Rows) -> Optional[str]:
    best = top_campaign(rows)
    if best is None:
        return None
    row, roi = best
    name = row.get("campaign_type") or row.get("campaign_id") or "Unknown"
    return (
        "Top performing campaign:\n"
        f"• Campaign: {name}\n"
        f"• ROI: {format_number(roi)}%\n\n"
        f"Analyzed {len(rows)} campaigns. See the chart for comparison."
    )


def _general(rows: Rows) -> str:
    examples = "\n".join(f'• "{question}"' for question in EXAMPLE_QUESTIONS)
    return (
        f"I analyzed {len(rows)} marketing campaigns. The data includes metrics like ROI, "
        "conversion rates, costs, and engagement scores. The chart below visualizes key "
        f"trends. Try asking specific questions like:\n{examples}"
    )


NARRATIVES: dict[Topic, Callable[[Rows], Optional[str]]] = {
    Topic.COUNT: _count,
    Topic.ROI: _roi,
    Topic.CONVERSION: _conversion,
    Topic.COST: _cost,
    Topic.ENGAGEMENT: _engagement,
    Topic.CHANNEL: _channel,
    Topic.TOP: _top,
}


def summarize(rows: Rows, message: str, intent: Intent | None = None) -> str:
    """Describe ``rows`` in the terms the question asked about.

    Topics are tried in priority order; a topic whose column holds no usable
    values falls through to the next one, and finally to a generic overview.
    """
    if not rows:
        return NO_DATA_MESSAGE

    intent = intent or classify_intent(message)
    for topic in intent.topics:
        text = NARRATIVES[topic](rows)
        if text:
            logger.debug(f"Summarized {len(rows)} rows as {topic.value}")
            return text

    return _general(rows)
