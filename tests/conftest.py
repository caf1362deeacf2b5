"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Candidate customer construction
- PostgreSQL connection pool (skipped when no database is reachable)
"""

from collections.abc import Callable, Generator
from typing import Any

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from src.domain.customer import Customer


def build_customer(**overrides: Any) -> Customer:
    """Create a transient customer with valid defaults."""
    fields: dict[str, Any] = {
        "email_address": "jane.doe@example.com",
        "title": "Ms",
        "first_name": "Jane",
        "last_name": "Doe",
        "address_line_1": "1 Road",
        "postcode": "AB1 2CD",
    }
    fields.update(overrides)
    return Customer(**fields)


@pytest.fixture
def make_customer() -> Callable[..., Customer]:
    """Factory fixture for transient customers."""
    return build_customer


@pytest.fixture(scope="session")
def pg_pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool against DATABASE_URL with migrations applied.

    Skips every dependent test when PostgreSQL is not reachable.
    """
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=5)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_customers(pg_pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty the customers table before each test."""
    with pg_pool.connection() as conn:
        conn.execute("DELETE FROM customers")
        conn.commit()
    yield


@pytest.fixture
def count_customers(pg_pool: ConnectionPool) -> Callable[..., int]:
    """Counter of stored rows, optionally for one email (case-insensitive)."""

    def count(email: str | None = None) -> int:
        with pg_pool.connection() as conn, conn.cursor() as cursor:
            if email is None:
                cursor.execute("SELECT COUNT(*) FROM customers")
            else:
                cursor.execute(
                    "SELECT COUNT(*) FROM customers WHERE LOWER(email_address) = LOWER(%s)",
                    (email,),
                )
            return cursor.fetchone()[0]

    return count
