"""
Database package for pgtest.

Provides the readiness gate, connection opening and row-count assertions.
"""

from .assertions import (
    QueryExecutionError,
    RecordCountMismatch,
    assert_record_count,
    assert_record_exists,
    assert_record_not_exists,
    count_records
)
from .connection_manager import (
    DatabaseConnectionError,
    MigrationError,
    open_connection,
    ping
)
from .readiness import ExponentialBackoff, ReadinessTimeoutError, async_retry, retry

__all__ = [
    'DatabaseConnectionError',
    'ExponentialBackoff',
    'MigrationError',
    'QueryExecutionError',
    'ReadinessTimeoutError',
    'RecordCountMismatch',
    'assert_record_count',
    'assert_record_exists',
    'assert_record_not_exists',
    'async_retry',
    'count_records',
    'open_connection',
    'ping',
    'retry'
]
