"""Fixed query templates over the marketing campaign table.

Every statement is a literal; no part of the user's message is ever
interpolated into SQL.
"""

from __future__ import annotations

from .base import Intent, QueryRule, QueryTemplate
from .intent import classify_intent

CAMPAIGN_TABLE = "SNOWFLAKEHACKATHON.PUBLIC.MARKETING_CAMPAIGN"

QUERY_TEMPLATES: dict[QueryRule, QueryTemplate] = {
    QueryRule.HIGH_ROI: QueryTemplate(
        rule=QueryRule.HIGH_ROI,
        description="Campaigns with ROI above 50, best first",
        sql=f"SELECT * FROM {CAMPAIGN_TABLE} WHERE roi > 50 ORDER BY roi DESC LIMIT 50;",
    ),
    QueryRule.HIGH_CONVERSION: QueryTemplate(
        rule=QueryRule.HIGH_CONVERSION,
        description="Campaigns by conversion rate, best first",
        sql=f"SELECT * FROM {CAMPAIGN_TABLE} ORDER BY conversion_rate DESC LIMIT 50;",
    ),
    QueryRule.LOW_COST: QueryTemplate(
        rule=QueryRule.LOW_COST,
        description="Campaigns by acquisition cost, cheapest first",
        sql=f"SELECT * FROM {CAMPAIGN_TABLE} ORDER BY acquisition_cost ASC LIMIT 50;",
    ),
    QueryRule.SOCIAL_MEDIA: QueryTemplate(
        rule=QueryRule.SOCIAL_MEDIA,
        description="Social media campaigns",
        sql=f"SELECT * FROM {CAMPAIGN_TABLE} WHERE channel_used = 'Social Media' LIMIT 100;",
    ),
    QueryRule.EMAIL: QueryTemplate(
        rule=QueryRule.EMAIL,
        description="Email campaigns",
        sql=f"SELECT * FROM {CAMPAIGN_TABLE} WHERE channel_used = 'Email' LIMIT 100;",
    ),
    QueryRule.SEARCH: QueryTemplate(
        rule=QueryRule.SEARCH,
        description="Search campaigns",
        sql=f"SELECT * FROM {CAMPAIGN_TABLE} WHERE channel_used = 'Search' LIMIT 100;",
    ),
    QueryRule.RECENT: QueryTemplate(
        rule=QueryRule.RECENT,
        description="Most recent campaigns",
        sql=f"SELECT * FROM {CAMPAIGN_TABLE} ORDER BY date DESC LIMIT 50;",
    ),
    QueryRule.ALL: QueryTemplate(
        rule=QueryRule.ALL,
        description="All campaigns",
        sql=f"SELECT * FROM {CAMPAIGN_TABLE} LIMIT 100;",
    ),
}


def template_for(intent: Intent) -> QueryTemplate:
    return QUERY_TEMPLATES[intent.rule]


def classify(message: str) -> QueryTemplate:
    """Map a free-text question to its query template."""
    return template_for(classify_intent(message))
