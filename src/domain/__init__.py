"""
Domain layer - Pure business logic with zero framework imports.

This package contains the customer registration rules. It defines its
own port interfaces for infrastructure abstraction, so the web and
database layers can be swapped without touching it.
"""

from .customer import FIELD_MAX_LENGTHS, Customer
from .exceptions import (
    CustomerNotFound,
    DuplicateEmail,
    InvalidArgument,
    PersistenceFailure,
    RegistrationError,
)
from .ports import CustomerRepository
from .registration import RegistrationService

__all__ = [
    "FIELD_MAX_LENGTHS",
    "Customer",
    "CustomerNotFound",
    "CustomerRepository",
    "DuplicateEmail",
    "InvalidArgument",
    "PersistenceFailure",
    "RegistrationError",
    "RegistrationService",
]
