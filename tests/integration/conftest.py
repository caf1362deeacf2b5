"""
Shared fixtures for integration tests.

Every test here runs against PostgreSQL with an empty customers table.
"""

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresCustomerRepository


@pytest.fixture
def repository(pg_pool: ConnectionPool, clean_customers: None) -> PostgresCustomerRepository:
    """Create repository instance for each test."""
    return PostgresCustomerRepository(pg_pool)
