"""
Database connections for pgtest.

Opens independent asyncpg connections to a test database, waits for the
server to answer and optionally applies a caller-supplied migration.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

import asyncpg

from pgtest.config.config_manager import ConnectionConfig
from pgtest.database.readiness import ExponentialBackoff, ReadinessTimeoutError, async_retry

logger = logging.getLogger(__name__)

MigrationFn = Callable[[asyncpg.Connection], Union[None, Awaitable[None]]]


class DatabaseConnectionError(Exception):
    """Raised when a connection cannot be opened or prepared."""
    pass


class MigrationError(DatabaseConnectionError):
    """Raised when the migration function fails."""
    pass


def _as_config(target: Union[str, ConnectionConfig]) -> ConnectionConfig:
    if isinstance(target, ConnectionConfig):
        return target
    return ConnectionConfig.from_dsn(target)


async def ping(target: Union[str, ConnectionConfig], timeout: float = 5.0) -> bool:
    """
    Open a connection, run SELECT 1 and close it again.

    Args:
        target: DSN or ConnectionConfig of the database
        timeout: Connection timeout in seconds

    Returns:
        True if the server answered SELECT 1
    """
    config = _as_config(target)
    conn = await asyncpg.connect(timeout=timeout, **config.connect_kwargs())
    try:
        return await conn.fetchval('SELECT 1') == 1
    finally:
        await conn.close()


async def apply_migration(conn: asyncpg.Connection, migration: MigrationFn) -> None:
    """Run a sync or async migration function against conn."""
    try:
        result: Any = migration(conn)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        raise MigrationError(f"migration failed: {e}") from e


async def open_connection(
    target: Union[str, ConnectionConfig],
    migration: Optional[MigrationFn] = None,
    backoff: Optional[ExponentialBackoff] = None,
    connect_timeout: float = 5.0
) -> asyncpg.Connection:
    """
    Open a fresh connection once the database answers.

    Args:
        target: DSN or ConnectionConfig of the database
        migration: Optional schema-setup function applied after the connection is ready
        backoff: Readiness policy, defaults to a 10s budget capped at 5s per wait
        connect_timeout: Timeout of a single connection attempt

    Returns:
        Open connection owned by the caller

    Raises:
        ReadinessTimeoutError: If the database does not answer in time
        MigrationError: If the migration function fails
    """
    config = _as_config(target)
    conn: Optional[asyncpg.Connection] = None

    async def probe() -> bool:
        nonlocal conn
        if conn is None or conn.is_closed():
            conn = await asyncpg.connect(timeout=connect_timeout, **config.connect_kwargs())
        try:
            return await conn.fetchval('SELECT 1') == 1
        except Exception:
            await conn.close()
            conn = None
            raise

    try:
        attempts = await async_retry(probe, backoff)
    except ReadinessTimeoutError:
        if conn is not None:
            await conn.close()
        raise
    logger.debug(f"Connected to {config.host_port}/{config.database} after {attempts} attempt(s)")

    if migration is not None:
        try:
            await apply_migration(conn, migration)
        except MigrationError:
            await conn.close()
            raise

    return conn
