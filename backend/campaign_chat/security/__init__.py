"""Security and validation module.

Contains the read-only SQL guard.
"""

from .sql_guard import apply_row_limit, is_safe_sql

__all__ = [
    "apply_row_limit",
    "is_safe_sql",
]
