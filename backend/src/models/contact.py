"""Contact data models."""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ContactPreference(str, Enum):
    """How the contact prefers to be reached."""

    EMAIL = "email"
    PHONE = "phone"


class ContactFormData(BaseModel):
    """Raw contact form input, before it becomes a stored Contact."""

    id: str | None = Field(None, description="Set when editing an existing contact")
    name: str = ""
    email: str = ""
    phone: str = ""
    reason: str = ""
    message: str = ""
    accepted_terms: bool = False
    contact_preference: ContactPreference = ContactPreference.EMAIL

    model_config = ConfigDict(
        use_enum_values=True, alias_generator=to_camel, populate_by_name=True
    )

    @field_validator("id", mode="before")
    @classmethod
    def blank_id_is_none(cls, v: str | None) -> str | None:
        """Treat an empty hidden id field as a new contact."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Contact(BaseModel):
    """A stored contact entry.

    Serialized with camelCase keys (``acceptedTerms``, ``createdAt``...).
    """

    id: str = Field(..., description="Unique contact identifier")
    name: str
    email: str
    phone: str = ""
    reason: str = ""
    message: str = ""
    accepted_terms: bool = False
    contact_preference: ContactPreference = ContactPreference.EMAIL

    # Timestamps
    created_at: str = Field(..., description="When the contact was first saved")
    updated_at: str = Field(..., description="When the contact was last saved")

    model_config = ConfigDict(
        use_enum_values=True, alias_generator=to_camel, populate_by_name=True
    )

    @classmethod
    def from_form(
        cls, form_data: ContactFormData, created_at: str | None = None
    ) -> "Contact":
        """Build a fully-populated contact from form input.

        Args:
            form_data: Raw form fields; its ``id`` is kept when present
            created_at: Original creation time to preserve on updates

        Returns:
            Contact with a fresh ``updated_at``
        """
        now = datetime.now(UTC).isoformat(timespec="microseconds")
        fields = form_data.model_dump(exclude={"id"})
        return cls(
            id=form_data.id or str(uuid.uuid4()),
            created_at=created_at or now,
            updated_at=now,
            **fields,
        )

    def to_form_data(self) -> ContactFormData:
        """Convert back into form input, e.g. to prefill the edit form."""
        return ContactFormData(**self.model_dump(exclude={"created_at", "updated_at"}))
