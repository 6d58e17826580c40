"""Tests for ContactRepository."""

import json
import logging

import pytest

from models.contact import Contact
from services.contact_repository import ContactRepository
from utils.constants import DEFAULT_CONTACTS_STORAGE_KEY
from utils.storage import FileStorage, InMemoryStorage


def make_contact(contact_id: str, name: str = "Ana") -> Contact:
    return Contact(
        id=contact_id,
        name=name,
        email=f"{name.lower()}@x.com",
        phone="3001234567",
        reason="project",
        message="Hello",
        accepted_terms=True,
        contact_preference="email",
        created_at="2026-01-20T08:00:00.123456+00:00",
        updated_at="2026-01-21T09:30:00.654321+00:00",
    )


class TestContactRepository:
    """Test cases for ContactRepository."""

    def test_get_all_never_written(self, repository):
        """Test reading before anything was stored."""
        assert repository.get_all() == []

    def test_add_appends_in_creation_order(self, repository):
        """Test that contacts are listed in the order they were added."""
        repository.add(make_contact("1", "Ana"))
        repository.add(make_contact("2", "Juan"))
        repository.add(make_contact("3", "Sofia"))

        assert [c.id for c in repository.get_all()] == ["1", "2", "3"]

    def test_writes_camel_case_json_array(self, storage, repository, sample_contact, sample_contact_item):
        """Test the stored wire format."""
        repository.add(sample_contact)

        stored = json.loads(storage.get_item(DEFAULT_CONTACTS_STORAGE_KEY))
        assert stored == [sample_contact_item]

    def test_reads_existing_collection(self, sample_contact_item):
        """Test loading a collection written earlier."""
        storage = InMemoryStorage(
            {DEFAULT_CONTACTS_STORAGE_KEY: json.dumps([sample_contact_item])}
        )

        contacts = ContactRepository(storage).get_all()

        assert len(contacts) == 1
        assert contacts[0].id == "contact-123"
        assert contacts[0].accepted_terms is True
        assert contacts[0].contact_preference == "phone"

    def test_get_by_id(self, repository):
        """Test finding a contact by ID."""
        repository.add(make_contact("1", "Ana"))
        repository.add(make_contact("2", "Juan"))

        assert repository.get_by_id("2").name == "Juan"
        assert repository.get_by_id("missing") is None

    def test_update_replaces_in_place(self, repository):
        """Test that update keeps the position of the contact."""
        repository.add(make_contact("1", "Ana"))
        repository.add(make_contact("2", "Juan"))

        updated = make_contact("1", "Ana").model_copy(update={"message": "x"})
        repository.update(updated)

        contacts = repository.get_all()
        assert [c.id for c in contacts] == ["1", "2"]
        assert contacts[0].message == "x"

    def test_update_unknown_id_is_noop(self, repository):
        """Test that updating a missing contact changes nothing."""
        repository.add(make_contact("1"))
        before = repository.get_all()

        repository.update(make_contact("missing", "Ghost"))

        assert repository.get_all() == before

    def test_remove(self, repository):
        """Test removing a contact."""
        repository.add(make_contact("1", "Ana"))
        repository.add(make_contact("2", "Juan"))

        repository.remove("1")

        assert [c.id for c in repository.get_all()] == ["2"]

    def test_remove_is_idempotent(self, repository):
        """Test removing the same contact twice."""
        repository.add(make_contact("1", "Ana"))
        repository.add(make_contact("2", "Juan"))

        repository.remove("1")
        once = repository.get_all()
        repository.remove("1")

        assert repository.get_all() == once

    def test_clear_deletes_storage_key(self, storage, repository):
        """Test that clear removes the key instead of writing an empty list."""
        repository.add(make_contact("1"))

        repository.clear()

        assert storage.get_item(DEFAULT_CONTACTS_STORAGE_KEY) is None
        assert repository.get_all() == []

    def test_custom_storage_key(self, storage):
        """Test storing the collection under another key."""
        repository = ContactRepository(storage, storage_key="contacts-v2")
        repository.add(make_contact("1"))

        assert storage.get_item("contacts-v2") is not None
        assert storage.get_item(DEFAULT_CONTACTS_STORAGE_KEY) is None

    def test_round_trip_through_fresh_repository(self, tmp_path):
        """Test that a fresh repository reads back exactly what was written."""
        path = tmp_path / "contacts.json"
        written = [make_contact("1", "Ana"), make_contact("2", "Juan")]
        writer = ContactRepository(FileStorage(path))
        for contact in written:
            writer.add(contact)
        writer.update(written[1].model_copy(update={"accepted_terms": False}))

        contacts = ContactRepository(FileStorage(path)).get_all()

        assert contacts[0] == written[0]
        assert contacts[1].accepted_terms is False
        assert contacts[1].updated_at == "2026-01-21T09:30:00.654321+00:00"
        assert contacts[1].created_at == "2026-01-20T08:00:00.123456+00:00"

    @pytest.mark.parametrize(
        "payload",
        [
            "not json at all",
            "{\"id\": \"1\"}",
            "[{\"id\": \"1\"}]",
            "[1, 2, 3]",
        ],
    )
    def test_unreadable_content_is_empty(self, payload, caplog):
        """Test that malformed stored content reads as no contacts."""
        storage = InMemoryStorage({DEFAULT_CONTACTS_STORAGE_KEY: payload})

        with caplog.at_level(logging.WARNING):
            assert ContactRepository(storage).get_all() == []

        assert "Ignoring unreadable contacts" in caplog.text

    @pytest.mark.parametrize(
        "content",
        [
            '{"' + DEFAULT_CONTACTS_STORAGE_KEY + '": "[{\\"id\\": ',
            "[]",
        ],
    )
    def test_corrupt_storage_file_reads_as_empty(self, tmp_path, content):
        """Test that a truncated or non-object file reads as no contacts."""
        path = tmp_path / "contacts.json"
        path.write_text(content)
        repository = ContactRepository(FileStorage(path))

        assert repository.get_all() == []
        assert repository.get_by_id("1") is None

        repository.add(make_contact("1"))

        assert [c.id for c in ContactRepository(FileStorage(path)).get_all()] == ["1"]

    def test_add_after_unreadable_content_starts_fresh(self):
        """Test that writing over malformed content replaces it."""
        storage = InMemoryStorage({DEFAULT_CONTACTS_STORAGE_KEY: "{broken"})
        repository = ContactRepository(storage)

        repository.add(make_contact("1"))

        assert [c.id for c in repository.get_all()] == ["1"]


class TestStorageKey:
    """Tests for the default storage key."""

    def test_default_key_matches_browser_widget(self, storage, repository):
        """Test that the collection lands under the widget's storage key."""
        repository.add(make_contact("1"))

        assert DEFAULT_CONTACTS_STORAGE_KEY == "contactosConFramework"
        assert storage.get_item("contactosConFramework") is not None
