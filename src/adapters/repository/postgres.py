"""
PostgreSQL repository adapter - Implements CustomerRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness Enforcement:
-----------------------
The customers table carries a UNIQUE index on LOWER(email_address).
save() inserts with ON CONFLICT DO NOTHING, so a registration that lost
a race against a concurrent insert of the same address gets no row back
instead of an exception. The domain turns that into DuplicateEmail.

Every other psycopg error is logged and re-raised as PersistenceFailure
so that no driver exception crosses the port boundary.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from src.domain.customer import Customer
from src.domain.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)

# Shipped as package data: src/migrations/*.sql
MIGRATIONS_DIR = Path(__file__).parent.parent.parent / "migrations"

_COLUMNS = (
    "id, registered_at, email_address, title, first_name, last_name, "
    "address_line_1, address_line_2, city, postcode, phone_number"
)


class PostgresCustomerRepository:
    """
    Implements CustomerRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @contextmanager
    def _errors_as_persistence_failure(self, operation: str) -> Iterator[None]:
        try:
            yield
        except psycopg.Error as e:
            logger.exception("Database error during %s", operation)
            raise PersistenceFailure(f"Database error during {operation}") from e

    def exists_by_email(self, email: str) -> bool:
        sql = "SELECT EXISTS (SELECT 1 FROM customers WHERE LOWER(email_address) = LOWER(%s))"

        with self._errors_as_persistence_failure("exists_by_email"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()
                return bool(row[0])

    def find_by_email(self, email: str) -> Customer | None:
        sql = f"SELECT {_COLUMNS} FROM customers WHERE LOWER(email_address) = LOWER(%s)"

        with self._errors_as_persistence_failure("find_by_email"):
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=class_row(Customer)) as cursor:
                    cursor.execute(sql, (email,))
                    return cursor.fetchone()

    def find_by_id(self, customer_id: int) -> Customer | None:
        sql = f"SELECT {_COLUMNS} FROM customers WHERE id = %s"

        with self._errors_as_persistence_failure("find_by_id"):
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=class_row(Customer)) as cursor:
                    cursor.execute(sql, (customer_id,))
                    return cursor.fetchone()

    def save(self, customer: Customer) -> Customer | None:
        """
        Insert a customer, letting the unique email index arbitrate races.

        registered_at is written from the candidate, never from NOW(), so
        the stored timestamp is the one captured at construction.

        Args:
            customer: Transient customer with normalized email

        Returns:
            Stored customer including its new id, or None when the email
            index already holds this address
        """
        sql = """
            INSERT INTO customers (
                registered_at, email_address, title, first_name, last_name,
                address_line_1, address_line_2, city, postcode, phone_number
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT DO NOTHING
            RETURNING id
        """
        params = (
            customer.registered_at,
            customer.email_address,
            customer.title,
            customer.first_name,
            customer.last_name,
            customer.address_line_1,
            customer.address_line_2,
            customer.city,
            customer.postcode,
            customer.phone_number,
        )

        with self._errors_as_persistence_failure("save"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()

        if row is None:
            return None
        return Customer(
            id=row[0],
            registered_at=customer.registered_at,
            email_address=customer.email_address,
            title=customer.title,
            first_name=customer.first_name,
            last_name=customer.last_name,
            address_line_1=customer.address_line_1,
            address_line_2=customer.address_line_2,
            city=customer.city,
            postcode=customer.postcode,
            phone_number=customer.phone_number,
        )

    def delete_by_id(self, customer_id: int) -> bool:
        sql = "DELETE FROM customers WHERE id = %s"

        with self._errors_as_persistence_failure("delete_by_id"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (customer_id,))
                conn.commit()
                return cursor.rowcount == 1

    def find_all(self) -> list[Customer]:
        sql = f"SELECT {_COLUMNS} FROM customers ORDER BY registered_at, id"

        with self._errors_as_persistence_failure("find_all"):
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=class_row(Customer)) as cursor:
                    cursor.execute(sql)
                    return cursor.fetchall()


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
        migrations_dir: Directory holding the *.sql files

    Raises:
        RuntimeError: If the directory is missing or holds no migrations,
            or if a migration fails
    """
    if not migrations_dir.is_dir():
        raise RuntimeError(f"Migrations directory not found: {migrations_dir}")

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        raise RuntimeError(f"No migration files found in {migrations_dir}")

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
