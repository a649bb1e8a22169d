"""Question classification and query templates."""

from .base import Intent, QueryRule, QueryTemplate, Topic
from .intent import (
    METRIC_COLUMNS,
    QUERY_RULES,
    TOPIC_KEYWORDS,
    classify_intent,
    detect_rule,
    detect_topics,
)
from .queries import CAMPAIGN_TABLE, QUERY_TEMPLATES, classify, template_for

__all__ = [
    # Types
    "Intent",
    "QueryRule",
    "QueryTemplate",
    "Topic",
    # Classification
    "METRIC_COLUMNS",
    "QUERY_RULES",
    "TOPIC_KEYWORDS",
    "classify_intent",
    "detect_rule",
    "detect_topics",
    # Templates
    "CAMPAIGN_TABLE",
    "QUERY_TEMPLATES",
    "classify",
    "template_for",
]
