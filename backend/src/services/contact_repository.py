"""Persistence for the contact collection."""

import logging

from pydantic import TypeAdapter, ValidationError

from models.contact import Contact
from utils.constants import DEFAULT_CONTACTS_STORAGE_KEY
from utils.storage import KeyValueStorage

logger = logging.getLogger(__name__)

_COLLECTION_ADAPTER = TypeAdapter(list[Contact])


class ContactRepository:
    """Reads and writes the whole contact collection under one storage key.

    Every operation loads the full collection and every mutation writes the
    full collection back; there are no partial writes.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str = DEFAULT_CONTACTS_STORAGE_KEY,
    ):
        """Initialize the repository.

        Args:
            storage: Key-value backend holding the serialized collection
            storage_key: Key the collection is stored under
        """
        self.storage = storage
        self.storage_key = storage_key

    def _read_storage(self) -> list[Contact]:
        data = self.storage.get_item(self.storage_key)
        if not data:
            return []
        try:
            return _COLLECTION_ADAPTER.validate_json(data)
        except ValidationError as e:
            # Unreadable content is treated as no data
            logger.warning(
                "Ignoring unreadable contacts under %s: %s", self.storage_key, e
            )
            return []

    def _write_storage(self, contacts: list[Contact]) -> None:
        payload = _COLLECTION_ADAPTER.dump_json(contacts, by_alias=True)
        self.storage.set_item(self.storage_key, payload.decode("utf-8"))

    def get_all(self) -> list[Contact]:
        """Return every stored contact in creation order."""
        return self._read_storage()

    def get_by_id(self, contact_id: str) -> Contact | None:
        """Return the contact with the given ID, or None if not found."""
        return next(
            (contact for contact in self._read_storage() if contact.id == contact_id),
            None,
        )

    def add(self, contact: Contact) -> None:
        """Append a contact to the collection."""
        contacts = self._read_storage()
        contacts.append(contact)
        self._write_storage(contacts)

    def update(self, updated_contact: Contact) -> None:
        """Replace the stored contact that shares updated_contact's ID.

        Nothing changes if no stored contact matches.
        """
        contacts = [
            updated_contact if contact.id == updated_contact.id else contact
            for contact in self._read_storage()
        ]
        self._write_storage(contacts)

    def remove(self, contact_id: str) -> None:
        """Remove a contact by ID. Removing an unknown ID is a no-op."""
        contacts = [
            contact for contact in self._read_storage() if contact.id != contact_id
        ]
        self._write_storage(contacts)

    def clear(self) -> None:
        """Delete the stored collection entirely."""
        self.storage.remove_item(self.storage_key)
