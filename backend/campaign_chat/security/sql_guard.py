"""Read-only guard for statements sent to the campaign warehouse.

Only single SELECT statements over the campaign table pass. The executor runs
every statement through :func:`is_safe_sql` before opening a connection.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, Tuple

import sqlparse
from sqlparse.sql import Identifier, IdentifierList, Parenthesis, Statement, TokenList
from sqlparse.tokens import Comment as CommentType
from sqlparse.tokens import DDL, DML, Keyword

from ..domain.queries import CAMPAIGN_TABLE

logger = logging.getLogger(__name__)

# Tables a statement may read from
ALLOWED_TABLES = frozenset({CAMPAIGN_TABLE})

# Words that turn a read into a write, a session change or a file transfer
FORBIDDEN_WORDS = frozenset({
    "INSERT", "UPDATE", "DELETE", "MERGE", "DROP", "ALTER", "TRUNCATE",
    "CREATE", "GRANT", "REVOKE", "CALL", "EXECUTE", "COPY", "PUT", "GET",
    "REMOVE", "UNDROP", "USE",
})

_FORBIDDEN_PATTERN = re.compile(r"\b(" + "|".join(sorted(FORBIDDEN_WORDS)) + r")\b")


def _first_word(stmt: Statement) -> str:
    token = stmt.token_first(skip_cm=True, skip_ws=True)
    return str(token).split()[0].upper() if token is not None else ""


def _forbidden_word(stmt: Statement) -> str | None:
    """First write keyword anywhere in the statement, comments included."""
    for token in stmt.flatten():
        if token.ttype in CommentType:
            found = _FORBIDDEN_PATTERN.search(token.value.upper())
            if found:
                return found.group(1)
        elif token.ttype in DML or token.ttype in DDL:
            if token.normalized != "SELECT":
                return token.normalized
        elif token.ttype in Keyword and token.normalized in FORBIDDEN_WORDS:
            return token.normalized
    return None


def _source_name(token) -> str:
    return str(token).split()[0].strip('"').upper()


def _sources(tokens: TokenList) -> Iterator[tuple[str, str]]:
    """Yield ``("cte", name)`` and ``("table", name)`` pairs in statement order.

    Subqueries are walked in place, so a table read inside parentheses is
    reported like any other.
    """
    expecting: str | None = None
    for token in tokens.tokens:
        if token.is_whitespace or token.ttype in CommentType:
            continue

        word = token.normalized if token.ttype in Keyword else None
        if token.ttype in Keyword.CTE:
            expecting = "cte"
            continue
        if word is not None and (word == "FROM" or word.endswith("JOIN")):
            expecting = "table"
            continue

        if expecting is not None:
            if word is not None:
                # Keyword in name position, e.g. FROM TABLE(...)
                yield expecting, word
            else:
                items = token.get_identifiers() if isinstance(token, IdentifierList) else [token]
                for item in items:
                    head = item.token_first(skip_ws=True) if isinstance(item, Identifier) else item
                    if isinstance(head, Parenthesis):
                        continue
                    yield expecting, _source_name(item)
        expecting = None

        if isinstance(token, TokenList):
            yield from _sources(token)


def _is_allowed(name: str, allowed: Iterable[str]) -> bool:
    return any(name == table or table.endswith("." + name) for table in allowed)


def is_safe_sql(sql: str, allowed_tables: Iterable[str] = ALLOWED_TABLES) -> Tuple[bool, str]:
    """
    Check that ``sql`` is one read-only SELECT over the allowed tables.

    Unqualified names match the last part of an allowed table, so
    ``marketing_campaign`` passes when the fully qualified table is allowed.

    Returns:
        Tuple of (is_safe, error_reason)
    """
    candidate = sql.strip().rstrip(";").strip()
    if not candidate:
        return False, "Empty SQL"

    # A semicolon left after stripping the terminator starts a second statement
    if ";" in candidate:
        return False, "Multiple statements not allowed"

    statements = [s for s in sqlparse.parse(candidate) if str(s).strip()]
    if len(statements) != 1:
        return False, f"Expected 1 statement, got {len(statements)}"
    stmt = statements[0]

    if stmt.get_type() != "SELECT" and _first_word(stmt) not in ("SELECT", "WITH"):
        return False, f"Only SELECT statements allowed, got: {_first_word(stmt) or 'nothing'}"

    word = _forbidden_word(stmt)
    if word:
        return False, f"Forbidden keyword: {word}"

    allowed = {table.upper() for table in allowed_tables}
    ctes: set[str] = set()
    for kind, name in _sources(stmt):
        if kind == "cte":
            ctes.add(name)
        elif name not in ctes and not _is_allowed(name, allowed):
            logger.warning(f"Statement reads from a table outside the allowlist: {name}")
            return False, f"Table not allowed: {name}"

    return True, ""


def apply_row_limit(sql: str, max_rows: int) -> str:
    """Append a LIMIT clause if the statement does not already have one."""
    if re.search(r"(?is)\bLIMIT\s+\d+", sql):
        return sql
    if re.search(r"(?is)\bFETCH\s+(FIRST|NEXT)\b", sql):
        return sql
    body = sql.strip().rstrip(";").rstrip()
    terminator = ";" if sql.strip().endswith(";") else ""
    return f"{body} LIMIT {max_rows}{terminator}"
