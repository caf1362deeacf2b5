"""
Registration domain service - customer registration and email uniqueness.

The business rule owned here: an email address identifies exactly one
customer, compared case-insensitively and stored lowercase.

Uniqueness is checked twice:
- exists_by_email() before writing, so the common duplicate case is
  rejected without touching the write path
- the repository's unique index on the write itself, which is the only
  guarantee under concurrent registrations of the same address

Both paths surface as DuplicateEmail. The check and the write are not
atomic; no locking is done here.
"""

import logging
from dataclasses import dataclass, replace

from .customer import Customer
from .exceptions import CustomerNotFound, DuplicateEmail, InvalidArgument
from .ports import CustomerRepository

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for customer registration.

    Orchestrates the registration flow: input guards, email
    normalization, duplicate detection and persistence.
    """

    repository: CustomerRepository

    def register_customer(self, candidate: Customer | None) -> Customer:
        """
        Register a new customer.

        Args:
            candidate: Transient customer built from validated form input

        Returns:
            Persisted customer with assigned id and lowercase email

        Raises:
            InvalidArgument: If candidate is None or its email is blank
            DuplicateEmail: If the email is already registered, either
                found by the pre-check or rejected by the store
        """
        if candidate is None:
            raise InvalidArgument("Customer cannot be None")
        email = self._require_email(candidate.email_address)

        if self.repository.exists_by_email(email):
            logger.info("Registration rejected, email already registered: %s", email)
            raise DuplicateEmail(email)

        saved = self.repository.save(replace(candidate, email_address=email))
        if saved is None:
            # Lost a race with a concurrent registration for the same address
            logger.info("Registration rejected by unique index: %s", email)
            raise DuplicateEmail(email)

        logger.info("Registered customer id=%s email=%s", saved.id, email)
        return saved

    def is_email_registered(self, email: str | None) -> bool:
        """
        Check whether an email address is already registered.

        Raises:
            InvalidArgument: If email is None or blank
        """
        return self.repository.exists_by_email(self._require_email(email))

    def find_by_email(self, email: str | None) -> Customer | None:
        """Case-insensitive lookup; None when no customer matches."""
        return self.repository.find_by_email(self._require_email(email))

    def find_by_id(self, customer_id: int | None) -> Customer | None:
        """Lookup by primary key; None when no customer matches."""
        if customer_id is None:
            raise InvalidArgument("Customer id cannot be None")
        return self.repository.find_by_id(customer_id)

    def list_customers(self) -> list[Customer]:
        """
        Return every registered customer.

        Loads the whole table; not suitable for large datasets.
        """
        return self.repository.find_all()

    def delete_customer(self, customer_id: int | None) -> None:
        """
        Permanently delete a customer.

        Raises:
            InvalidArgument: If customer_id is None
            CustomerNotFound: If no customer has this id
        """
        if customer_id is None:
            raise InvalidArgument("Customer id cannot be None")
        if not self.repository.delete_by_id(customer_id):
            raise CustomerNotFound(customer_id)
        logger.info("Deleted customer id=%s", customer_id)

    def _require_email(self, email: str | None) -> str:
        """
        Reject missing email and normalize the rest.

        Applies: strip whitespace + lowercase
        """
        if email is None or not email.strip():
            raise InvalidArgument("Email address cannot be empty")
        return email.strip().lower()
