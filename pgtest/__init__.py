"""
pgtest

Disposable PostgreSQL containers for test suites: provisioning, readiness
waiting, connections and row-count assertions.
"""

from pgtest.config import ConfigValidationError, ConnectionConfig, TestDatabaseConfig
from pgtest.database import (
    DatabaseConnectionError,
    ExponentialBackoff,
    MigrationError,
    QueryExecutionError,
    ReadinessTimeoutError,
    RecordCountMismatch,
    assert_record_count,
    assert_record_exists,
    assert_record_not_exists,
    open_connection,
)
from pgtest.testing import (
    ContainerSetupError,
    DockerTestManager,
    TestDatabase,
    TestDatabaseNotStartedError,
)

__version__ = "0.1.0"

__all__ = [
    'ConfigValidationError',
    'ConnectionConfig',
    'ContainerSetupError',
    'DatabaseConnectionError',
    'DockerTestManager',
    'ExponentialBackoff',
    'MigrationError',
    'QueryExecutionError',
    'ReadinessTimeoutError',
    'RecordCountMismatch',
    'TestDatabase',
    'TestDatabaseConfig',
    'TestDatabaseNotStartedError',
    'assert_record_count',
    'assert_record_exists',
    'assert_record_not_exists',
    'open_connection',
]
