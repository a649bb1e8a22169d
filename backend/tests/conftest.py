"""Shared fixtures: a fake Snowflake driver and a test client wired to it."""

from __future__ import annotations

import os
import sys
from typing import Any

import pytest
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from campaign_chat.core.config import WarehouseConfig
from campaign_chat.main import app, get_connector

SNOWFLAKE_ENV = {
    "SNOWFLAKE_ACCOUNT": "xy12345.us-east-1",
    "SNOWFLAKE_USERNAME": "analyst",
    "SNOWFLAKE_PASSWORD": "secret",
    "SNOWFLAKE_WAREHOUSE": "COMPUTE_WH",
    "SNOWFLAKE_ROLE": "ANALYST",
}


class FakeCursor:
    """DB-API cursor that serves preset rows with upper-case column names."""

    def __init__(self, warehouse: "FakeWarehouse") -> None:
        self._warehouse = warehouse
        self.description = None
        self.closed = False
        self._data: list[tuple] = []

    def execute(self, sql: str) -> None:
        self._warehouse.executed.append(sql)
        if self._warehouse.execute_error is not None:
            raise self._warehouse.execute_error
        rows = self._warehouse.rows
        columns = list(rows[0].keys()) if rows else list(self._warehouse.columns)
        self.description = [(name.upper(), None, None, None, None, None, True) for name in columns]
        self._data = [tuple(row.get(name) for name in columns) for row in rows]

    def fetchall(self) -> list[tuple]:
        return list(self._data)

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(self, warehouse: "FakeWarehouse") -> None:
        self._warehouse = warehouse
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self._warehouse)

    def close(self) -> None:
        self.closed = True
        self._warehouse.events.append("close")
        if self._warehouse.close_error is not None:
            raise self._warehouse.close_error


class FakeWarehouse:
    """Callable connector recording every connection it hands out."""

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        columns: list[str] | None = None,
        connect_error: Exception | None = None,
        execute_error: Exception | None = None,
        close_error: Exception | None = None,
    ) -> None:
        self.rows = rows or []
        self.columns = columns or []
        self.connect_error = connect_error
        self.execute_error = execute_error
        self.close_error = close_error
        self.configs: list[WarehouseConfig] = []
        self.connections: list[FakeConnection] = []
        self.executed: list[str] = []
        self.events: list[str] = []

    def __call__(self, config: WarehouseConfig) -> FakeConnection:
        self.configs.append(config)
        self.events.append("connect")
        if self.connect_error is not None:
            raise self.connect_error
        conn = FakeConnection(self)
        self.connections.append(conn)
        return conn


@pytest.fixture(autouse=True)
def snowflake_env(monkeypatch):
    """Complete credentials; individual tests remove what they need to."""
    for name, value in SNOWFLAKE_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("SNOWFLAKE_DATABASE", raising=False)
    monkeypatch.delenv("SNOWFLAKE_SCHEMA", raising=False)
    monkeypatch.delenv("MAX_ROWS", raising=False)


@pytest.fixture
def config() -> WarehouseConfig:
    return WarehouseConfig(
        account="xy12345.us-east-1",
        user="analyst",
        password="secret",
        warehouse="COMPUTE_WH",
        role="ANALYST",
    )


@pytest.fixture
def warehouse() -> FakeWarehouse:
    return FakeWarehouse()


@pytest.fixture
def client(warehouse: FakeWarehouse):
    app.dependency_overrides[get_connector] = lambda: warehouse
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def campaign_rows() -> list[dict[str, Any]]:
    return [
        {"campaign_id": 1, "campaign_type": "Influencer", "channel_used": "Email",
         "roi": 80.0, "conversion_rate": 0.12, "acquisition_cost": 1200.0,
         "engagement_score": 7.0, "date": "2021-01-05"},
        {"campaign_id": 2, "campaign_type": "Display", "channel_used": "Search",
         "roi": 20.0, "conversion_rate": 0.08, "acquisition_cost": 800.0,
         "engagement_score": 5.0, "date": "2021-02-11"},
        {"campaign_id": 3, "campaign_type": "Email", "channel_used": "Email",
         "roi": 40.0, "conversion_rate": 0.1, "acquisition_cost": 500.5,
         "engagement_score": 9.0, "date": "2021-03-20"},
    ]
