"""
Domain exceptions - Semantic error types for customer registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class InvalidArgument(RegistrationError):
    """Required input is missing or blank at the service boundary."""

    pass


class DuplicateEmail(RegistrationError):
    """Email address is already registered (case-insensitive)."""

    pass


class CustomerNotFound(RegistrationError):
    """No customer exists with the requested id."""

    pass


class PersistenceFailure(RegistrationError):
    """Storage fault unrelated to email uniqueness (connectivity, constraints)."""

    pass
