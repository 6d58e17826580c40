"""Services for Contact Book backend."""

from .contact_repository import ContactRepository
from .contact_service import (
    ContactNotFoundError,
    ContactService,
    TermsNotAcceptedError,
)

__all__ = [
    "ContactRepository",
    "ContactService",
    "ContactNotFoundError",
    "TermsNotAcceptedError",
]
