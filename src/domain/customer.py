"""
Customer entity - the single record type of the registration system.

A Customer is either transient (built from form input, no id) or
persisted (id assigned by the repository). registered_at is captured
when the object is constructed and is never touched by persistence.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

# Column sizes of the customers table
FIELD_MAX_LENGTHS: dict[str, int] = {
    "email_address": 255,
    "title": 5,
    "first_name": 50,
    "last_name": 50,
    "address_line_1": 255,
    "address_line_2": 255,
    "city": 255,
    "postcode": 10,
    "phone_number": 20,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Customer:
    """Registered (or about to be registered) customer."""

    email_address: str
    title: str
    first_name: str
    last_name: str
    address_line_1: str
    postcode: str
    address_line_2: str | None = None
    city: str | None = None
    phone_number: str | None = None
    registered_at: datetime = field(default_factory=_utcnow)
    id: int | None = None

    @property
    def is_persisted(self) -> bool:
        """True once the repository has assigned an id."""
        return self.id is not None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
