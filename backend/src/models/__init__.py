"""Data models for Contact Book."""

from .contact import Contact, ContactFormData, ContactPreference

__all__ = [
    "Contact",
    "ContactFormData",
    "ContactPreference",
]
