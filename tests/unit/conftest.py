"""
Unit test fixtures.

Provides an in-memory CustomerRepository that enforces case-insensitive
email uniqueness on save, the same contract as the PostgreSQL adapter.
"""

import threading
from dataclasses import replace

import pytest

from src.domain.customer import Customer


class InMemoryCustomerRepository:
    """Thread-safe dict-backed repository for service-level tests."""

    def __init__(self) -> None:
        self._rows: dict[int, Customer] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self.save_calls = 0

    def _lookup(self, email: str) -> Customer | None:
        for customer in self._rows.values():
            if customer.email_address.lower() == email.lower():
                return customer
        return None

    def exists_by_email(self, email: str) -> bool:
        with self._lock:
            return self._lookup(email) is not None

    def find_by_email(self, email: str) -> Customer | None:
        with self._lock:
            return self._lookup(email)

    def find_by_id(self, customer_id: int) -> Customer | None:
        with self._lock:
            return self._rows.get(customer_id)

    def save(self, customer: Customer) -> Customer | None:
        with self._lock:
            self.save_calls += 1
            if self._lookup(customer.email_address) is not None:
                return None
            stored = replace(customer, id=self._next_id)
            self._rows[stored.id] = stored
            self._next_id += 1
            return stored

    def delete_by_id(self, customer_id: int) -> bool:
        with self._lock:
            return self._rows.pop(customer_id, None) is not None

    def find_all(self) -> list[Customer]:
        with self._lock:
            return sorted(self._rows.values(), key=lambda c: (c.registered_at, c.id))

    def count(self) -> int:
        with self._lock:
            return len(self._rows)


@pytest.fixture
def memory_repository() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository()
