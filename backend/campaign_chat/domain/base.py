"""Base types for question classification and query templates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class QueryRule(str, Enum):
    """Outcome of query-template selection, in priority order."""
    HIGH_ROI = "high_roi"
    HIGH_CONVERSION = "high_conversion"
    LOW_COST = "low_cost"
    SOCIAL_MEDIA = "social_media"
    EMAIL = "email"
    SEARCH = "search"
    RECENT = "recent"
    ALL = "all"


class Topic(str, Enum):
    """What the user wants summarized, in priority order."""
    COUNT = "count"
    ROI = "roi"
    CONVERSION = "conversion"
    COST = "cost"
    ENGAGEMENT = "engagement"
    CHANNEL = "channel"
    TOP = "top"
    GENERAL = "general"


@dataclass(frozen=True)
class QueryTemplate:
    """A fixed SQL statement for one query rule."""

    rule: QueryRule
    description: str
    sql: str


@dataclass(frozen=True)
class Intent:
    """Everything the pipeline needs to know about one question.

    Computed once per message and shared by query selection, summary and
    chart projection.
    """

    rule: QueryRule
    topics: tuple[Topic, ...]
    metric: Optional[str]  # column for the chart y-axis, None → default
    by_channel: bool

    @property
    def topic(self) -> Topic:
        return self.topics[0] if self.topics else Topic.GENERAL
