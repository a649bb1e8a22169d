"""Application configuration for the Snowflake warehouse connection."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationMissingError

load_dotenv(override=True)
load_dotenv(".env.local", override=True)

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "SNOWFLAKEHACKATHON"
DEFAULT_SCHEMA = "PUBLIC"
DEFAULT_MAX_ROWS = 100


@dataclass(frozen=True)
class WarehouseConfig:
    """Validated credentials for one Snowflake session."""
    account: str
    user: str
    password: str
    warehouse: str
    role: str
    database: str = DEFAULT_DATABASE
    schema: str = DEFAULT_SCHEMA

    @property
    def connect_kwargs(self) -> dict[str, str]:
        """Keyword arguments for ``snowflake.connector.connect``."""
        return {
            "account": self.account,
            "user": self.user,
            "password": self.password,
            "warehouse": self.warehouse,
            "database": self.database,
            "schema": self.schema,
            "role": self.role,
        }

    def __repr__(self) -> str:
        return (
            f"WarehouseConfig(account={self.account!r}, user={self.user!r}, "
            f"warehouse={self.warehouse!r}, database={self.database!r}, "
            f"schema={self.schema!r}, role={self.role!r})"
        )


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Warehouse fields hold the raw environment values; call
    :meth:`warehouse_config` to obtain a validated :class:`WarehouseConfig`.
    """
    # Snowflake
    snowflake_account: Optional[str]
    snowflake_username: Optional[str]
    snowflake_password: Optional[str]
    snowflake_warehouse: Optional[str]
    snowflake_database: str
    snowflake_schema: str
    snowflake_role: Optional[str]

    # HTTP
    cors_origins: list[str]
    log_level: str

    # Legacy campaign listing
    max_rows: int

    def missing_credentials(self) -> list[str]:
        """Names of required environment variables that are unset or empty."""
        required = {
            "SNOWFLAKE_ACCOUNT": self.snowflake_account,
            "SNOWFLAKE_USERNAME": self.snowflake_username,
            "SNOWFLAKE_PASSWORD": self.snowflake_password,
            "SNOWFLAKE_WAREHOUSE": self.snowflake_warehouse,
            "SNOWFLAKE_ROLE": self.snowflake_role,
        }
        return [name for name, value in required.items() if not value]

    def warehouse_config(self) -> WarehouseConfig:
        """Validate the credentials and build the connection config.

        Raises:
            ConfigurationMissingError: If any required credential is absent
        """
        missing = self.missing_credentials()
        if missing:
            logger.error(f"Missing Snowflake credentials: {', '.join(missing)}")
            raise ConfigurationMissingError(missing)

        return WarehouseConfig(
            account=self.snowflake_account,
            user=self.snowflake_username,
            password=self.snowflake_password,
            warehouse=self.snowflake_warehouse,
            role=self.snowflake_role,
            database=self.snowflake_database,
            schema=self.snowflake_schema,
        )


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _max_rows() -> int:
    raw = _env("MAX_ROWS")
    if raw is None:
        return DEFAULT_MAX_ROWS
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"MAX_ROWS={raw!r} is not an integer, using {DEFAULT_MAX_ROWS}")
        return DEFAULT_MAX_ROWS
    if value < 1:
        logger.warning(f"MAX_ROWS={value} must be positive, using {DEFAULT_MAX_ROWS}")
        return DEFAULT_MAX_ROWS
    return value


def get_settings() -> Settings:
    """Load settings from environment variables."""
    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    return Settings(
        snowflake_account=_env("SNOWFLAKE_ACCOUNT"),
        snowflake_username=_env("SNOWFLAKE_USERNAME"),
        snowflake_password=_env("SNOWFLAKE_PASSWORD"),
        snowflake_warehouse=_env("SNOWFLAKE_WAREHOUSE"),
        snowflake_database=_env("SNOWFLAKE_DATABASE") or DEFAULT_DATABASE,
        snowflake_schema=_env("SNOWFLAKE_SCHEMA") or DEFAULT_SCHEMA,
        snowflake_role=_env("SNOWFLAKE_ROLE"),

        cors_origins=cors_origins,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),

        max_rows=_max_rows(),
    )
