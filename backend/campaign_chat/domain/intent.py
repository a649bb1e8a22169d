"""Keyword classification shared by query selection, summaries and charts."""

from __future__ import annotations

from .base import Intent, QueryRule, Topic

# =============================================================================
# KEYWORD TABLES
# =============================================================================

# Each rule matches when any group is fully present; a group matches when
# any of its alternatives occurs as a substring.
QUERY_RULES: list[tuple[QueryRule, list[list[str]]]] = [
    (QueryRule.HIGH_ROI, [["high roi", "best roi", "top roi"]]),
    (QueryRule.HIGH_CONVERSION, [["conversion"], ["high", "best"]]),
    (QueryRule.LOW_COST, [["cost"], ["low", "cheap"]]),
    (QueryRule.SOCIAL_MEDIA, [["social media"]]),
    (QueryRule.EMAIL, [["email"]]),
    (QueryRule.SEARCH, [["search", "google"]]),
    (QueryRule.RECENT, [["recent", "latest"]]),
]

TOPIC_KEYWORDS: dict[Topic, list[str]] = {
    Topic.COUNT: ["how many", "count"],
    Topic.ROI: ["roi", "return on investment"],
    Topic.CONVERSION: ["conversion"],
    Topic.COST: ["cost"],
    Topic.ENGAGEMENT: ["engagement"],
    Topic.CHANNEL: ["channel", "platform"],
    Topic.TOP: ["best", "top", "highest"],
}

METRIC_COLUMNS: dict[Topic, str] = {
    Topic.ROI: "roi",
    Topic.CONVERSION: "conversion_rate",
    Topic.COST: "acquisition_cost",
    Topic.ENGAGEMENT: "engagement_score",
}

DEFAULT_METRIC = "roi"

CHANNEL_KEYWORD = "channel"


def _matches(text: str, groups: list[list[str]]) -> bool:
    return all(any(kw in text for kw in group) for group in groups)


def detect_rule(text: str) -> QueryRule:
    """First matching query rule for already lower-cased text."""
    for rule, groups in QUERY_RULES:
        if _matches(text, groups):
            return rule
    return QueryRule.ALL


def detect_topics(text: str) -> tuple[Topic, ...]:
    """All summary topics mentioned in lower-cased text, in priority order."""
    return tuple(
        topic for topic, keywords in TOPIC_KEYWORDS.items()
        if any(kw in text for kw in keywords)
    )


def classify_intent(message: str) -> Intent:
    """Classify a free-text question.

    Examples:
        "high roi and low cost" -> rule HIGH_ROI, topics (ROI, COST)
        "which channel performs best" -> rule ALL, by_channel, topics (CHANNEL, TOP)
    """
    text = (message or "").lower()
    topics = detect_topics(text)
    metric = next((METRIC_COLUMNS[t] for t in topics if t in METRIC_COLUMNS), None)

    return Intent(
        rule=detect_rule(text),
        topics=topics,
        metric=metric,
        by_channel=CHANNEL_KEYWORD in text,
    )
