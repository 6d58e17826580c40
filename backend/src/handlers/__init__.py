"""Event handlers for Contact Book."""

from .contact_form_handler import (
    ConfirmationDialog,
    ContactFormHandler,
    ToastNotifier,
    create_contact_form_handler,
)

__all__ = [
    "ContactFormHandler",
    "ConfirmationDialog",
    "ToastNotifier",
    "create_contact_form_handler",
]
