"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition tests.
"""

import pytest
from psycopg_pool import ConnectionPool

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture(autouse=True)
def clean_database(pg_pool: ConnectionPool, clean_customers: None) -> None:
    """Every adversarial test starts from an empty customers table."""
