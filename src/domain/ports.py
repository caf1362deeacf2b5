"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .customer import Customer


class CustomerRepository(Protocol):
    """
    Port interface for customer persistence.

    The store must enforce case-insensitive uniqueness of email_address
    itself; the service-level existence check is only a fast path.
    Any storage fault other than an email collision is raised as
    PersistenceFailure.
    """

    def exists_by_email(self, email: str) -> bool:
        """
        Check whether a customer with this email exists (case-insensitive).

        Args:
            email: Email address in any casing

        Returns:
            True if a matching record exists
        """
        ...

    def find_by_email(self, email: str) -> Customer | None:
        """Load a customer by email (case-insensitive), None if absent."""
        ...

    def find_by_id(self, customer_id: int) -> Customer | None:
        """Load a customer by primary key, None if absent."""
        ...

    def save(self, customer: Customer) -> Customer | None:
        """
        Insert a transient customer.

        Args:
            customer: Candidate with normalized (lowercase) email and no id

        Returns:
            The stored customer with its assigned id, or None if the
            uniqueness constraint on email rejected the insert
        """
        ...

    def delete_by_id(self, customer_id: int) -> bool:
        """
        Permanently remove a customer.

        Returns:
            True if a row was deleted, False if no customer had this id
        """
        ...

    def find_all(self) -> list[Customer]:
        """Load every customer, oldest registration first (no pagination)."""
        ...
