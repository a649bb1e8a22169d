"""Campaign Chat.

A chat front-end over the marketing campaign table in Snowflake. Questions
are matched against keyword rules, mapped to fixed SQL statements, and the
results are returned as a text summary plus an optional chart.

Package Structure:
    core/       - Core infrastructure (config, warehouse access, models, exceptions)
    domain/     - Question classification and query templates
    insights/   - Text summaries and chart projections of result rows
    security/   - Read-only SQL guard
"""

from .core import (
    ChartPayload,
    ChartPoint,
    ChatRequest,
    ChatResponse,
    ChatTurn,
    QueryExecutor,
    Settings,
    WarehouseConfig,
    get_settings,
)
from .domain import Intent, QueryRule, QueryTemplate, Topic, classify, classify_intent
from .insights import project, summarize

__all__ = [
    # Core
    "ChartPayload",
    "ChartPoint",
    "ChatRequest",
    "ChatResponse",
    "ChatTurn",
    "QueryExecutor",
    "Settings",
    "WarehouseConfig",
    "get_settings",
    # Domain
    "Intent",
    "QueryRule",
    "QueryTemplate",
    "Topic",
    "classify",
    "classify_intent",
    # Insights
    "project",
    "summarize",
]
