"""Field validation for the contact form."""

import re
from enum import Enum
from typing import Any

from models.contact import ContactPreference

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
PHONE_PATTERN = re.compile(r"^\d{10}$")

REQUIRED_FIELDS = (
    "name",
    "email",
    "phone",
    "reason",
    "message",
    "contact_preference",
)
TERMS_FIELD = "accepted_terms"

REQUIRED_MESSAGE = "This field is required."
INVALID_EMAIL_MESSAGE = "The email format is not valid."
INVALID_PHONE_MESSAGE = "The phone number must contain 10 digits."
TERMS_MESSAGE = "You must accept the terms and conditions."
INVALID_PREFERENCE_MESSAGE = "Select a valid contact preference."

_PREFERENCES = {preference.value for preference in ContactPreference}


def validate_field(field: str, value: Any) -> str | None:
    """Validate a single form field.

    Args:
        field: Form field name
        value: Raw value as submitted (checkbox values are booleans)

    Returns:
        Error message, or None if the value is valid
    """
    if field == TERMS_FIELD:
        return None if value is True else TERMS_MESSAGE

    if isinstance(value, Enum):
        value = value.value
    text = "" if value is None else str(value).strip()
    if field in REQUIRED_FIELDS and not text:
        return REQUIRED_MESSAGE

    if field == "email" and not EMAIL_PATTERN.match(text):
        return INVALID_EMAIL_MESSAGE
    if field == "phone" and not PHONE_PATTERN.match(text):
        return INVALID_PHONE_MESSAGE
    if field == "contact_preference" and text not in _PREFERENCES:
        return INVALID_PREFERENCE_MESSAGE
    return None


def validate_contact_form(form_data: dict[str, Any]) -> dict[str, str]:
    """Validate every rule-bearing field of a contact form.

    Returns:
        Mapping of field name to error message; empty when the form is valid
    """
    errors = {}
    for field in (*REQUIRED_FIELDS, TERMS_FIELD):
        error = validate_field(field, form_data.get(field))
        if error:
            errors[field] = error
    return errors
