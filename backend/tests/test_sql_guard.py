"""Unit tests for the read-only SQL guard."""

from __future__ import annotations

import pytest

from campaign_chat.domain import CAMPAIGN_TABLE, QUERY_TEMPLATES
from campaign_chat.security import apply_row_limit, is_safe_sql


class TestIsSafeSql:
    @pytest.mark.parametrize(
        "sql",
        [
            f"SELECT * FROM {CAMPAIGN_TABLE} LIMIT 10;",
            f"select roi from {CAMPAIGN_TABLE.lower()} where channel_used = 'Email'",
            "SELECT roi FROM marketing_campaign",
            f"SELECT c.roi FROM {CAMPAIGN_TABLE} AS c",
            "WITH x AS (SELECT 1 AS n) SELECT n FROM x",
            f"SELECT n FROM (SELECT roi AS n FROM {CAMPAIGN_TABLE}) sub",
            "SELECT CURRENT_VERSION() AS server_version",
        ],
    )
    def test_allows_reads(self, sql):
        """Single SELECT statements over the campaign table pass."""
        ok, reason = is_safe_sql(sql)
        assert ok, reason

    def test_all_templates_pass(self):
        """Every canned query is accepted."""
        for template in QUERY_TEMPLATES.values():
            ok, reason = is_safe_sql(template.sql)
            assert ok, f"{template.rule}: {reason}"

    @pytest.mark.parametrize(
        "sql",
        [
            "",
            "   ;",
            f"DELETE FROM {CAMPAIGN_TABLE}",
            f"DROP TABLE {CAMPAIGN_TABLE}",
            f"UPDATE {CAMPAIGN_TABLE} SET roi = 0",
            f"SELECT 1; DROP TABLE {CAMPAIGN_TABLE}",
            f"SELECT * FROM {CAMPAIGN_TABLE} /* DROP TABLE t */",
            f"SELECT * FROM {CAMPAIGN_TABLE} -- delete everything\n",
        ],
    )
    def test_rejects_everything_else(self, sql):
        """Writes, DDL, stacked statements and hidden code are refused."""
        ok, reason = is_safe_sql(sql)
        assert not ok
        assert reason

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT * FROM SNOWFLAKE.ACCOUNT_USAGE.USERS",
            f"SELECT * FROM {CAMPAIGN_TABLE} JOIN other_table o ON o.id = campaign_id",
            "SELECT n FROM (SELECT name AS n FROM secrets) sub",
            f"SELECT * FROM {CAMPAIGN_TABLE} WHERE roi IN (SELECT roi FROM other_table)",
        ],
    )
    def test_rejects_other_tables(self, sql):
        """Reads outside the campaign table are refused, subqueries included."""
        ok, reason = is_safe_sql(sql)
        assert not ok
        assert "Table not allowed" in reason

    def test_custom_allowlist(self):
        """Callers can widen the set of readable tables."""
        ok, _ = is_safe_sql("SELECT * FROM t", allowed_tables=["T"])
        assert ok


class TestApplyRowLimit:
    def test_appends_limit(self):
        """A statement without a limit gets one."""
        assert apply_row_limit("SELECT * FROM t", 25) == "SELECT * FROM t LIMIT 25"

    def test_keeps_terminator(self):
        """A trailing semicolon stays at the end."""
        assert apply_row_limit("SELECT * FROM t;", 5) == "SELECT * FROM t LIMIT 5;"

    def test_existing_limit_untouched(self):
        """Statements that already limit rows are unchanged."""
        assert apply_row_limit("SELECT * FROM t LIMIT 3", 100) == "SELECT * FROM t LIMIT 3"
        sql = "SELECT * FROM t FETCH FIRST 3 ROWS ONLY"
        assert apply_row_limit(sql, 100) == sql
