"""
End-to-end tests against a real PostgreSQL container.

The session database comes from the pgtest plugin enabled in conftest.py.
"""

import uuid

import pytest

from pgtest.database.assertions import (
    QueryExecutionError,
    assert_record_count,
    assert_record_exists,
    assert_record_not_exists
)
from pgtest.database.connection_manager import MigrationError, ping


async def create_test_table(conn):
    await conn.execute("CREATE TABLE IF NOT EXISTS test (id uuid not null primary key)")


@pytest.fixture
def pg_migration():
    return create_test_table


@pytest.mark.asyncio
class TestRunPostgres:
    """Test the full bootstrap, open and assert flow."""

    async def test_insert_and_select(self, pg_connection):
        """A migrated connection can write and read rows"""
        record_id = uuid.uuid4()

        async with pg_connection.transaction():
            await pg_connection.execute("INSERT INTO test (id) VALUES ($1)", record_id)
            got = await pg_connection.fetchval("SELECT id FROM test WHERE id = $1", record_id)

        assert got == record_id

    async def test_record_exists_and_not_exists(self, pg_connection):
        """Row-count assertions see rows written in the same transaction"""
        record_id = uuid.uuid4()

        async with pg_connection.transaction():
            await pg_connection.execute("INSERT INTO test (id) VALUES ($1)", record_id)

            assert await assert_record_exists(pg_connection, "test", "id = $1", record_id) is True
            assert await assert_record_not_exists(pg_connection, "test", "id = $1", uuid.uuid4()) is True

    async def test_record_count_mismatch_reports_details(self, pg_connection):
        """Expecting one row where none match fails with a descriptive report"""
        missing_id = uuid.uuid4()
        reports = []

        result = await assert_record_count(pg_connection, 1, "test", "id = $1", missing_id,
                                           report=reports.append)

        assert result is False
        assert "Expected record count is 1, but got 0" in reports[0]
        assert "Table: test" in reports[0]
        assert str(missing_id) in reports[0]

    async def test_record_assertions_fixture(self, pg_connection, record_assertions):
        """The plugin recorder passes when every expectation holds"""
        record_id = uuid.uuid4()
        await pg_connection.execute("INSERT INTO test (id) VALUES ($1)", record_id)

        assert await record_assertions.exists(pg_connection, "test", "id = $1", record_id)
        assert await record_assertions.not_exists(pg_connection, "test", "id = $1", uuid.uuid4())

    async def test_query_error_is_fatal(self, pg_connection):
        """Counting in a missing table raises instead of reporting a mismatch"""
        with pytest.raises(QueryExecutionError):
            await assert_record_exists(pg_connection, "no_such_table", "id = $1", 1)

    async def test_open_returns_independent_connections(self, pg_test_database):
        """Every open() hands out a new connection"""
        first = await pg_test_database.open()
        second = await pg_test_database.open()
        try:
            assert first is not second
            first_pid = await first.fetchval("SELECT pg_backend_pid()")
            second_pid = await second.fetchval("SELECT pg_backend_pid()")
            assert first_pid != second_pid
        finally:
            await first.close()
            await second.close()

    async def test_failing_migration_raises(self, pg_test_database):
        """A broken migration surfaces as MigrationError"""
        async def broken(conn):
            await conn.execute("CREATE TABLE")

        with pytest.raises(MigrationError):
            await pg_test_database.open(broken)

    async def test_published_dsn_answers_ping(self, pg_test_database):
        """The published connection string reaches the container"""
        assert pg_test_database.dsn.startswith("postgres://test_user:secret@")
        assert await ping(pg_test_database.dsn) is True


class TestBootstrap:
    """Test the once-only start of the session database."""

    def test_start_again_reuses_environment(self, pg_test_database):
        """Calling start() again does not provision a second container"""
        host_port = pg_test_database.host_port

        teardown = pg_test_database.start()

        assert teardown == pg_test_database.teardown
        assert pg_test_database.host_port == host_port
