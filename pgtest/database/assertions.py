"""
Row-count assertions for pgtest.

The table name and filter are interpolated into the query as given; only the
parameters are bound by the driver.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

import asyncpg

logger = logging.getLogger(__name__)

Reporter = Callable[[str], Any]


class QueryExecutionError(Exception):
    """Raised when the count query itself fails."""
    pass


@dataclass(frozen=True)
class RecordCountMismatch:
    """A row count that differs from the expected one."""

    table: str
    filter_query: str
    params: Tuple[Any, ...]
    expected: int
    actual: int

    def __str__(self) -> str:
        return (
            f"Expected record count is {self.expected}, but got {self.actual}\n"
            f"Table: {self.table}\n"
            f"Filter: {self.filter_query}\n"
            f"Params: {list(self.params)!r}"
        )


async def count_records(conn: asyncpg.Connection, table: str, filter_query: str, *params: Any) -> int:
    """
    Count rows of table matching filter_query.

    Raises:
        QueryExecutionError: If the query cannot be executed
    """
    query = f"SELECT COUNT(*) FROM {table} WHERE {filter_query}"
    try:
        return await conn.fetchval(query, *params)
    except Exception as e:
        raise QueryExecutionError(f"Query execution failed: {query}: {e}") from e


async def assert_record_count(
    conn: asyncpg.Connection,
    expected_count: int,
    table: str,
    filter_query: str,
    *params: Any,
    report: Optional[Reporter] = None
) -> bool:
    """
    Check that exactly expected_count rows of table match filter_query.

    A mismatch is not raised: it is logged, handed to report (if given) and
    signalled by the return value so callers can keep going.

    Args:
        conn: Connection, usually inside an open transaction
        expected_count: Expected number of matching rows
        table: Table name
        filter_query: WHERE clause, with $1.. placeholders for params
        *params: Bound parameters
        report: Callback receiving the failure message

    Returns:
        True if the count matched

    Raises:
        QueryExecutionError: If the query cannot be executed
    """
    count = await count_records(conn, table, filter_query, *params)
    if count == expected_count:
        return True

    mismatch = RecordCountMismatch(table, filter_query, tuple(params), expected_count, count)
    logger.warning(str(mismatch))
    if report is not None:
        report(str(mismatch))
    return False


async def assert_record_exists(conn: asyncpg.Connection, table: str, filter_query: str,
                               *params: Any, report: Optional[Reporter] = None) -> bool:
    """Check that exactly one row of table matches filter_query."""
    return await assert_record_count(conn, 1, table, filter_query, *params, report=report)


async def assert_record_not_exists(conn: asyncpg.Connection, table: str, filter_query: str,
                                   *params: Any, report: Optional[Reporter] = None) -> bool:
    """Check that no row of table matches filter_query."""
    return await assert_record_count(conn, 0, table, filter_query, *params, report=report)
