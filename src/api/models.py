"""
API request and response models.

Pydantic models for form validation on the registration page and for
the administrative JSON API.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from src.domain.customer import FIELD_MAX_LENGTHS, Customer

# Human-readable field names used in form error messages
FIELD_LABELS: dict[str, str] = {
    "email_address": "Email address",
    "title": "Title",
    "first_name": "First name",
    "last_name": "Last name",
    "address_line_1": "Address line 1",
    "address_line_2": "Address line 2",
    "city": "City",
    "postcode": "Postcode",
    "phone_number": "Phone number",
}

INVALID_EMAIL_MESSAGE = "Please provide a valid email address"


class RegistrationForm(BaseModel):
    """
    Fields submitted by the registration page.

    Whitespace is stripped before length checks, so a value made only of
    spaces counts as missing. Optional fields submitted empty become None.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    email_address: EmailStr
    title: str = Field(..., min_length=1, max_length=FIELD_MAX_LENGTHS["title"])
    first_name: str = Field(..., min_length=1, max_length=FIELD_MAX_LENGTHS["first_name"])
    last_name: str = Field(..., min_length=1, max_length=FIELD_MAX_LENGTHS["last_name"])
    address_line_1: str = Field(..., min_length=1, max_length=FIELD_MAX_LENGTHS["address_line_1"])
    address_line_2: str | None = Field(None, max_length=FIELD_MAX_LENGTHS["address_line_2"])
    city: str | None = Field(None, max_length=FIELD_MAX_LENGTHS["city"])
    postcode: str = Field(..., min_length=1, max_length=FIELD_MAX_LENGTHS["postcode"])
    phone_number: str | None = Field(None, max_length=FIELD_MAX_LENGTHS["phone_number"])

    @field_validator("address_line_2", "city", "phone_number", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("email_address", mode="before")
    @classmethod
    def strip_email(cls, value: object) -> object:
        # EmailStr runs before str_strip_whitespace would apply
        if isinstance(value, str):
            return value.strip()
        return value

    def to_customer(self) -> Customer:
        """Build a transient customer; registered_at is set to now."""
        return Customer(
            email_address=str(self.email_address),
            title=self.title,
            first_name=self.first_name,
            last_name=self.last_name,
            address_line_1=self.address_line_1,
            address_line_2=self.address_line_2,
            city=self.city,
            postcode=self.postcode,
            phone_number=self.phone_number,
        )


def form_errors(exc: ValidationError) -> dict[str, str]:
    """
    Translate a RegistrationForm ValidationError into one message per field.

    Returns:
        Mapping of field name to the first user-facing message for it
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        if not error["loc"]:
            continue
        name = str(error["loc"][0])
        if name in errors:
            continue
        label = FIELD_LABELS.get(name, name)
        kind = error["type"]
        blank = isinstance(error.get("input"), str) and not error["input"].strip()

        if kind in ("missing", "string_too_short") or blank:
            message = f"{label} is required"
        elif kind == "string_too_long":
            message = f"{label} must be {FIELD_MAX_LENGTHS[name]} characters or less"
        elif name == "email_address":
            message = INVALID_EMAIL_MESSAGE
        else:
            message = f"{label} is invalid"
        errors[name] = message
    return errors


class CustomerResponse(BaseModel):
    """Customer record as returned by the administrative API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    registered_at: datetime
    email_address: str
    title: str
    first_name: str
    last_name: str
    address_line_1: str
    address_line_2: str | None = None
    city: str | None = None
    postcode: str
    phone_number: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
