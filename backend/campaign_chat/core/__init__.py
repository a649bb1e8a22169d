"""Core infrastructure module.

Contains configuration, warehouse access, models, and exceptions.
"""

from .config import Settings, WarehouseConfig, get_settings
from .db import QueryExecutor, Row, RowSet, check_connection, get_connection
from .exceptions import (
    NO_MESSAGE,
    ChatError,
    ConfigurationMissingError,
    ConnectionFailureError,
    DatabaseError,
    ExecutionFailureError,
    InvalidRequestError,
    UnexpectedFailureError,
)
from .models import MAX_CHART_POINTS, ChartPayload, ChartPoint, ChatRequest, ChatResponse, ChatTurn

__all__ = [
    # Config
    "Settings",
    "WarehouseConfig",
    "get_settings",
    # Warehouse
    "QueryExecutor",
    "Row",
    "RowSet",
    "check_connection",
    "get_connection",
    # Exceptions
    "NO_MESSAGE",
    "ChatError",
    "ConfigurationMissingError",
    "ConnectionFailureError",
    "DatabaseError",
    "ExecutionFailureError",
    "InvalidRequestError",
    "UnexpectedFailureError",
    # Models
    "MAX_CHART_POINTS",
    "ChartPayload",
    "ChartPoint",
    "ChatRequest",
    "ChatResponse",
    "ChatTurn",
]
