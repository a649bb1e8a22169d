"""Warehouse connection and query execution."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
import logging
import math
from typing import Any, Callable

import snowflake.connector
from snowflake.connector.errors import Error as SnowflakeError

from .config import WarehouseConfig
from .exceptions import ConnectionFailureError, ExecutionFailureError
from ..security.sql_guard import is_safe_sql

logger = logging.getLogger(__name__)

Row = dict[str, Any]
RowSet = list[Row]
Connector = Callable[[WarehouseConfig], Any]


def get_connection(config: WarehouseConfig) -> snowflake.connector.SnowflakeConnection:
    """Open a Snowflake session with the driver's default timeouts."""
    return snowflake.connector.connect(**config.connect_kwargs)


def _normalize_value(value: Any) -> Any:
    """Normalize warehouse values to JSON scalars."""
    if value is None:
        return None
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return bytes(value).hex()
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def rows_from_cursor(cursor: Any) -> RowSet:
    """Build a row set from an executed DB-API cursor.

    Column names are lower-cased since Snowflake folds unquoted identifiers
    to upper case.
    """
    columns = [col[0].lower() for col in cursor.description] if cursor.description else []
    return [
        {column: _normalize_value(value) for column, value in zip(columns, row)}
        for row in cursor.fetchall()
    ]


def _release(conn: Any) -> None:
    try:
        conn.close()
        logger.info("Connection closed")
    except Exception as e:
        logger.error(f"Failed to close connection: {e}")


class QueryExecutor:
    """Runs one statement per call on a fresh warehouse connection."""

    def __init__(self, config: WarehouseConfig, connect: Connector | None = None) -> None:
        self.config = config
        self._connect = connect or get_connection

    def _open(self) -> Any:
        try:
            conn = self._connect(self.config)
        except SnowflakeError as e:
            logger.error(f"Unable to connect to Snowflake account {self.config.account}: {e}")
            raise ConnectionFailureError() from e

        logger.info(f"Connected to Snowflake ({self.config.database}.{self.config.schema})")
        return conn

    def execute(self, sql: str) -> RowSet:
        """Execute ``sql`` and return its rows.

        The connection is closed before returning on every path; a failure to
        close is logged and does not replace the result or the original error.

        Raises:
            ConnectionFailureError: If no session could be opened
            ExecutionFailureError: If the statement is rejected by the guard or fails
        """
        ok, reason = is_safe_sql(sql)
        if not ok:
            logger.error(f"Refusing to run statement: {reason}")
            raise ExecutionFailureError()

        conn = self._open()
        try:
            logger.info(f"Executing query: {sql}")
            cursor = conn.cursor()
            try:
                cursor.execute(sql)
                rows = rows_from_cursor(cursor)
            finally:
                cursor.close()
        except SnowflakeError as e:
            logger.error(f"Failed to execute query: {e}")
            raise ExecutionFailureError() from e
        finally:
            _release(conn)

        logger.info(f"Query returned {len(rows)} rows")
        return rows


def check_connection(config: WarehouseConfig, connect: Connector | None = None) -> dict[str, Any]:
    """Probe the warehouse and report whether a session can run a query."""
    result: dict[str, Any] = {
        "connected": False,
        "account": config.account,
        "database": config.database,
        "schema": config.schema,
        "warehouse": config.warehouse,
        "server_version": None,
        "error": None,
    }

    try:
        rows = QueryExecutor(config, connect=connect).execute(
            "SELECT CURRENT_VERSION() AS server_version"
        )
    except (ConnectionFailureError, ExecutionFailureError) as e:
        result["error"] = e.message
        return result

    result["connected"] = True
    if rows:
        result["server_version"] = rows[0].get("server_version")
    return result
