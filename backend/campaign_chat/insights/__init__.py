"""Result presentation: text summaries and chart projections."""

from .charts import channel_pie, metric_bar, numeric_columns, pick_x_column, project
from .numeric import column_values, to_number
from .summarizer import EXAMPLE_QUESTIONS, NO_DATA_MESSAGE, summarize, top_campaign

__all__ = [
    "channel_pie",
    "metric_bar",
    "numeric_columns",
    "pick_x_column",
    "project",
    "column_values",
    "to_number",
    "EXAMPLE_QUESTIONS",
    "NO_DATA_MESSAGE",
    "summarize",
    "top_campaign",
]
