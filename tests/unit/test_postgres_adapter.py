"""
Unit tests for PostgresCustomerRepository without a database.

Uses a mocked psycopg pool to verify:
- Driver errors are wrapped in PersistenceFailure
- An insert swallowed by ON CONFLICT maps to None
- Successful inserts carry the candidate's registered_at
"""

from unittest.mock import MagicMock

import psycopg
import pytest

from src.adapters.repository.postgres import (
    MIGRATIONS_DIR,
    PostgresCustomerRepository,
    run_migrations,
)
from src.domain.exceptions import PersistenceFailure


@pytest.fixture
def cursor() -> MagicMock:
    return MagicMock()


@pytest.fixture
def pool(cursor: MagicMock) -> MagicMock:
    """Mock ConnectionPool whose connections hand out the cursor fixture."""
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool


class TestSave:
    """Tests for save()."""

    def test_returns_customer_with_assigned_id(self, pool, cursor, make_customer) -> None:
        cursor.fetchone.return_value = (17,)
        candidate = make_customer()

        saved = PostgresCustomerRepository(pool).save(candidate)

        assert saved is not None
        assert saved.id == 17
        assert saved.registered_at == candidate.registered_at
        assert saved.email_address == candidate.email_address

    def test_conflict_returns_none(self, pool, cursor, make_customer) -> None:
        """No RETURNING row means the unique email index rejected the insert."""
        cursor.fetchone.return_value = None

        assert PostgresCustomerRepository(pool).save(make_customer()) is None

    def test_registered_at_sent_as_parameter(self, pool, cursor, make_customer) -> None:
        cursor.fetchone.return_value = (1,)
        candidate = make_customer()

        PostgresCustomerRepository(pool).save(candidate)

        params = cursor.execute.call_args[0][1]
        assert params[0] == candidate.registered_at
        assert params[1] == candidate.email_address


class TestErrorTranslation:
    """Driver errors never leave the adapter unwrapped."""

    def test_save_wraps_operational_error(self, pool, cursor, make_customer) -> None:
        cursor.execute.side_effect = psycopg.OperationalError("connection lost")

        with pytest.raises(PersistenceFailure) as exc_info:
            PostgresCustomerRepository(pool).save(make_customer())

        assert isinstance(exc_info.value.__cause__, psycopg.OperationalError)

    def test_exists_wraps_error(self, pool, cursor) -> None:
        cursor.execute.side_effect = psycopg.OperationalError("down")

        with pytest.raises(PersistenceFailure):
            PostgresCustomerRepository(pool).exists_by_email("a@example.com")

    def test_delete_wraps_error(self, pool, cursor) -> None:
        cursor.execute.side_effect = psycopg.errors.QueryCanceled("timeout")

        with pytest.raises(PersistenceFailure):
            PostgresCustomerRepository(pool).delete_by_id(1)

    def test_pool_failure_wrapped(self, make_customer) -> None:
        pool = MagicMock()
        pool.connection.side_effect = psycopg.OperationalError("no connection")

        with pytest.raises(PersistenceFailure):
            PostgresCustomerRepository(pool).find_all()


class TestDelete:
    """Tests for delete_by_id()."""

    def test_row_deleted_returns_true(self, pool, cursor) -> None:
        cursor.rowcount = 1
        assert PostgresCustomerRepository(pool).delete_by_id(1) is True

    def test_nothing_deleted_returns_false(self, pool, cursor) -> None:
        cursor.rowcount = 0
        assert PostgresCustomerRepository(pool).delete_by_id(1) is False


class TestExists:
    """Tests for exists_by_email()."""

    def test_returns_bool(self, pool, cursor) -> None:
        cursor.fetchone.return_value = (True,)
        assert PostgresCustomerRepository(pool).exists_by_email("A@Example.com") is True

    def test_query_is_case_insensitive(self, pool, cursor) -> None:
        cursor.fetchone.return_value = (False,)

        PostgresCustomerRepository(pool).exists_by_email("A@Example.com")

        sql, params = cursor.execute.call_args[0]
        assert "LOWER(email_address) = LOWER(%s)" in sql
        assert params == ("A@Example.com",)


class TestRunMigrations:
    """Tests for run_migrations() with a mocked pool."""

    def test_schema_shipped_with_package(self) -> None:
        assert (MIGRATIONS_DIR / "001_create_customers.sql").is_file()

    def test_executes_files_in_order(self, pool, tmp_path) -> None:
        (tmp_path / "002_second.sql").write_text("SELECT 2")
        (tmp_path / "001_first.sql").write_text("SELECT 1")

        run_migrations(pool, tmp_path)

        conn = pool.connection.return_value.__enter__.return_value
        assert [c.args[0] for c in conn.execute.call_args_list] == ["SELECT 1", "SELECT 2"]

    def test_missing_directory_fails(self, pool, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="not found"):
            run_migrations(pool, tmp_path / "absent")

        pool.connection.assert_not_called()

    def test_empty_directory_fails(self, pool, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="No migration files"):
            run_migrations(pool, tmp_path)

    def test_failed_migration_raises(self, pool, tmp_path) -> None:
        (tmp_path / "001_broken.sql").write_text("NOT SQL")
        conn = pool.connection.return_value.__enter__.return_value
        conn.execute.side_effect = psycopg.errors.SyntaxError("syntax error")

        with pytest.raises(RuntimeError, match="001_broken.sql"):
            run_migrations(pool, tmp_path)
