"""Contact management service."""

import logging
from typing import Any

from models.contact import Contact, ContactFormData
from services.contact_repository import ContactRepository

logger = logging.getLogger(__name__)


class ContactNotFoundError(ValueError):
    """An update referenced a contact ID that is not stored."""

    def __init__(self, contact_id: str):
        super().__init__(f"Contact {contact_id} not found")
        self.contact_id = contact_id


class TermsNotAcceptedError(ValueError):
    """A contact was submitted without accepting the terms."""

    pass


class ContactService:
    """Single entry point for UI code working with contacts.

    Field-level validation happens before ``save`` is called; the only rule
    enforced here is that a contact never gets stored without accepted terms.
    """

    def __init__(self, repository: ContactRepository):
        """Initialize the contact service.

        Args:
            repository: Store for the contact collection
        """
        self.repository = repository

    def save(self, form_data: ContactFormData | dict[str, Any]) -> Contact:
        """Create or update a contact from form input.

        A form carrying an ``id`` updates that contact and keeps its original
        ``created_at``; a form without one creates a new contact.

        Args:
            form_data: Raw form fields

        Returns:
            The stored Contact

        Raises:
            ContactNotFoundError: If the form's ID matches no stored contact
            TermsNotAcceptedError: If the terms were not accepted
        """
        if not isinstance(form_data, ContactFormData):
            form_data = ContactFormData.model_validate(form_data)

        if form_data.accepted_terms is not True:
            raise TermsNotAcceptedError("Terms must be accepted to save a contact")

        if form_data.id:
            existing = self.repository.get_by_id(form_data.id)
            if not existing:
                logger.error("No contact with ID %s to update", form_data.id)
                raise ContactNotFoundError(form_data.id)

            contact = Contact.from_form(form_data, created_at=existing.created_at)
            self.repository.update(contact)
            logger.info("Updated contact %s", contact.id)
            return contact

        contact = Contact.from_form(form_data)
        self.repository.add(contact)
        logger.info("Created contact %s", contact.id)
        return contact

    def list(self) -> list[Contact]:
        """Return all contacts."""
        return self.repository.get_all()

    def remove(self, contact_id: str) -> None:
        """Delete one contact by ID."""
        self.repository.remove(contact_id)
        logger.info("Removed contact %s", contact_id)

    def clear_all(self) -> None:
        """Delete every contact."""
        self.repository.clear()
        logger.info("Cleared all contacts")

    def get_for_edit(self, contact_id: str) -> Contact | None:
        """Get a contact to prefill the edit form."""
        return self.repository.get_by_id(contact_id)
