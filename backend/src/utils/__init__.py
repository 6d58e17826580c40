"""Utility functions for Contact Book."""

from .storage import (
    DynamoDBStorage,
    FileStorage,
    InMemoryStorage,
    KeyValueStorage,
    StorageError,
    create_storage,
)
from .validation import validate_contact_form, validate_field

__all__ = [
    "KeyValueStorage",
    "InMemoryStorage",
    "FileStorage",
    "DynamoDBStorage",
    "StorageError",
    "create_storage",
    "validate_contact_form",
    "validate_field",
]
