"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest

from models.contact import Contact, ContactPreference
from services.contact_repository import ContactRepository
from services.contact_service import ContactService
from utils.storage import InMemoryStorage


@pytest.fixture
def sample_form_data():
    """Create valid raw form input for a new contact."""
    return {
        "name": "Ana",
        "email": "a@x.com",
        "phone": "3001234567",
        "reason": "project",
        "message": "I would like to talk about a website.",
        "accepted_terms": True,
        "contact_preference": "email",
    }


@pytest.fixture
def sample_contact():
    """Create a stored contact with old timestamps."""
    return Contact(
        id="contact-123",
        name="Juan",
        email="juan@example.com",
        phone="3109876543",
        reason="collaboration",
        message="Let's build something.",
        accepted_terms=True,
        contact_preference=ContactPreference.PHONE,
        created_at="2026-01-20T08:00:00+00:00",
        updated_at="2026-01-20T08:00:00+00:00",
    )


@pytest.fixture
def sample_contact_item():
    """Create a contact as it appears in the stored collection."""
    return {
        "id": "contact-123",
        "name": "Juan",
        "email": "juan@example.com",
        "phone": "3109876543",
        "reason": "collaboration",
        "message": "Let's build something.",
        "acceptedTerms": True,
        "contactPreference": "phone",
        "createdAt": "2026-01-20T08:00:00+00:00",
        "updatedAt": "2026-01-20T08:00:00+00:00",
    }


@pytest.fixture
def storage():
    """Create an empty in-memory storage."""
    return InMemoryStorage()


@pytest.fixture
def repository(storage):
    """Create a ContactRepository over in-memory storage."""
    return ContactRepository(storage)


@pytest.fixture
def contact_service(repository):
    """Create a ContactService over in-memory storage."""
    return ContactService(repository)


@pytest.fixture
def mock_dynamodb_table():
    """Create a mock DynamoDB table for testing."""
    mock_table = Mock()
    mock_table.put_item.return_value = {}
    mock_table.get_item.return_value = {}
    mock_table.delete_item.return_value = {}
    return mock_table
