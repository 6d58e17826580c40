"""Event handler for the contact form and contact list.

Binds form events (submit, blur, reset) and list events (edit, delete,
clear all) to ContactService. Destructive actions wait on a confirmation
dialog before touching the service:

    handler = create_contact_form_handler()
    task = asyncio.ensure_future(handler.delete(contact_id))
    ...
    handler.confirmation.confirm()  # later, from the dialog's button
"""

import asyncio
import logging
import os
from collections import deque
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import boto3
from pydantic import BaseModel, Field

from models.contact import Contact, ContactFormData
from services.contact_repository import ContactRepository
from services.contact_service import ContactNotFoundError, ContactService
from utils.constants import (
    DEFAULT_CONTACTS_STORAGE_KEY,
    DEFAULT_TOAST_DURATION_SECONDS,
    EMPTY_CONTACT_LIST_MESSAGE,
    MISSING_PHONE_LABEL,
    SAVE_CONTACT_LABEL,
    TOAST_HISTORY_SIZE,
    UPDATE_CONTACT_LABEL,
)
from utils.storage import create_storage
from utils.validation import validate_contact_form, validate_field

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# Environment variables
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")
CONTACTS_STORAGE_BACKEND = os.environ.get("CONTACTS_STORAGE_BACKEND", "memory")
CONTACTS_STORAGE_KEY = os.environ.get(
    "CONTACTS_STORAGE_KEY", DEFAULT_CONTACTS_STORAGE_KEY
)
CONTACTS_STORAGE_PATH = os.environ.get("CONTACTS_STORAGE_PATH", "contacts.json")
CONTACTS_TABLE = os.environ.get("CONTACTS_TABLE", f"contact-book-contacts-{ENVIRONMENT}")
TOAST_DURATION_SECONDS = float(
    os.environ.get("TOAST_DURATION_SECONDS", str(DEFAULT_TOAST_DURATION_SECONDS))
)

DELETE_CONFIRMATION = "Are you sure you want to delete this contact?"
CLEAR_ALL_CONFIRMATION = (
    "Are you sure you want to delete ALL contacts? This action cannot be undone."
)


class NotificationLevel(str, Enum):
    """Toast notification styles."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Toast(BaseModel):
    """A transient status notification."""

    message: str
    level: NotificationLevel = NotificationLevel.INFO
    shown_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_seconds: float = DEFAULT_TOAST_DURATION_SECONDS

    def is_visible(self, now: datetime | None = None) -> bool:
        """Check whether the toast is still on screen."""
        now = now or datetime.now(UTC)
        return (now - self.shown_at).total_seconds() < self.duration_seconds


class ToastNotifier:
    """Shows one toast at a time; a new toast replaces the visible one.

    ``history`` keeps only the most recent ``history_size`` toasts.
    """

    def __init__(
        self,
        duration_seconds: float = TOAST_DURATION_SECONDS,
        history_size: int = TOAST_HISTORY_SIZE,
    ):
        self.duration_seconds = duration_seconds
        self.current: Toast | None = None
        self.history: deque[Toast] = deque(maxlen=history_size)

    def show(
        self, message: str, level: NotificationLevel = NotificationLevel.INFO
    ) -> Toast:
        toast = Toast(
            message=message,
            level=NotificationLevel(level),
            duration_seconds=self.duration_seconds,
        )
        self.current = toast
        self.history.append(toast)
        return toast

    @property
    def visible(self) -> Toast | None:
        if self.current and self.current.is_visible():
            return self.current
        return None


class ConfirmationDialog:
    """Yes/no dialog whose answer arrives later as a resolved future.

    ``request_confirmation`` opens the dialog and returns a future; the
    dialog's buttons call ``confirm`` or ``cancel`` to resolve it. Opening a
    new request while one is pending answers the older one with False.
    """

    def __init__(self):
        self.message: str | None = None
        self._pending: asyncio.Future | None = None

    @property
    def is_open(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def request_confirmation(self, message: str) -> asyncio.Future:
        """Open the dialog. Must be called from a running event loop."""
        loop = asyncio.get_running_loop()
        self._resolve(False)
        self.message = message
        self._pending = loop.create_future()
        return self._pending

    def confirm(self) -> None:
        self._resolve(True)

    def cancel(self) -> None:
        self._resolve(False)

    def _resolve(self, decision: bool) -> None:
        pending, self._pending = self._pending, None
        self.message = None
        if pending is not None and not pending.done():
            pending.set_result(decision)


class ContactListItem(BaseModel):
    """One rendered row of the contact list."""

    id: str
    name: str
    email: str
    phone: str
    last_updated: str


class ContactListView(BaseModel):
    """The rendered contact list."""

    items: list[ContactListItem] = Field(default_factory=list)
    empty_message: str | None = None


def format_last_updated(updated_at: str) -> str:
    """Format an ISO timestamp as a local date and time label."""
    try:
        local = datetime.fromisoformat(updated_at).astimezone()
    except ValueError:
        return f"Last updated: {updated_at}"
    return f"Last updated: {local.strftime('%x')} {local.strftime('%X')}"


class ContactFormHandler:
    """Controller for the contact form and list.

    Talks to ContactService exclusively and re-renders the list after every
    change it makes.
    """

    def __init__(
        self,
        service: ContactService,
        confirmation: ConfirmationDialog | None = None,
        notifier: ToastNotifier | None = None,
    ):
        """Initialize the handler and render the initial list.

        Args:
            service: Contact service
            confirmation: Dialog gating delete and clear all
            notifier: Toast notifier for status messages
        """
        self.service = service
        self.confirmation = confirmation or ConfirmationDialog()
        self.notifier = notifier or ToastNotifier()
        self.form_values: dict[str, Any] = {}
        self.field_errors: dict[str, str] = {}
        self.submit_label = SAVE_CONTACT_LABEL
        self.contact_list = ContactListView()
        self.render_contact_list()

    # -----------------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------------

    def render_contact_list(self) -> ContactListView:
        """Rebuild the list view from the stored contacts."""
        contacts = self.service.list()
        if not contacts:
            self.contact_list = ContactListView(empty_message=EMPTY_CONTACT_LIST_MESSAGE)
            return self.contact_list

        self.contact_list = ContactListView(
            items=[
                ContactListItem(
                    id=contact.id,
                    name=contact.name,
                    email=contact.email,
                    phone=contact.phone or MISSING_PHONE_LABEL,
                    last_updated=format_last_updated(contact.updated_at),
                )
                for contact in contacts
            ]
        )
        return self.contact_list

    # -----------------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------------

    def blur(self, field: str, value: Any) -> bool:
        """Validate one field when it loses focus.

        Returns:
            True if the field is valid
        """
        self.field_errors.pop(field, None)
        error = validate_field(field, value)
        if error:
            self.field_errors[field] = error
            return False
        return True

    def validate_form(self, form_data: dict[str, Any]) -> bool:
        self.field_errors = validate_contact_form(form_data)
        return not self.field_errors

    # -----------------------------------------------------------------------
    # Form events
    # -----------------------------------------------------------------------

    def submit(self, form_data: dict[str, Any]) -> Contact | None:
        """Handle a form submission.

        The contact being edited is taken from the form's hidden ``id`` when
        the submitted fields do not carry one.

        Returns:
            The saved Contact, or None if nothing was saved
        """
        form_data = dict(form_data)
        if not form_data.get("id") and self.form_values.get("id"):
            form_data["id"] = self.form_values["id"]

        if not self.validate_form(form_data):
            self.notifier.show(
                "Please fix the errors in the form.", NotificationLevel.ERROR
            )
            return None

        is_updating = bool(str(form_data.get("id") or "").strip())
        try:
            contact = self.service.save(form_data)
        except ContactNotFoundError as e:
            logger.warning(f"Submitted contact no longer exists: {e}")
            self.notifier.show(
                "This contact no longer exists.", NotificationLevel.ERROR
            )
            self.reset()
            self.render_contact_list()
            return None

        self.notifier.show(
            "Contact updated successfully!" if is_updating else "Contact saved successfully!",
            NotificationLevel.SUCCESS,
        )
        self.reset()
        self.render_contact_list()
        return contact

    def reset(self) -> None:
        """Clear the form, its errors and the contact being edited."""
        self.form_values = {}
        self.field_errors = {}
        self.submit_label = SAVE_CONTACT_LABEL

    def edit(self, contact_id: str) -> ContactFormData | None:
        """Load a contact into the form for editing.

        Returns:
            The prefilled form data, or None if the contact does not exist
        """
        contact = self.service.get_for_edit(contact_id)
        if not contact:
            return None

        form_data = contact.to_form_data()
        self.form_values = form_data.model_dump()
        self.field_errors = {}
        self.submit_label = UPDATE_CONTACT_LABEL
        return form_data

    # -----------------------------------------------------------------------
    # List events
    # -----------------------------------------------------------------------

    async def delete(self, contact_id: str) -> bool:
        """Delete a contact once the user confirms.

        Returns:
            True if the contact was deleted
        """
        confirmed = await self.confirmation.request_confirmation(DELETE_CONFIRMATION)
        if not confirmed:
            return False

        self.service.remove(contact_id)
        self.render_contact_list()
        self.notifier.show("Contact deleted.", NotificationLevel.SUCCESS)
        return True

    async def clear_all(self) -> bool:
        """Delete every contact once the user confirms.

        Returns:
            True if the contacts were deleted
        """
        confirmed = await self.confirmation.request_confirmation(CLEAR_ALL_CONFIRMATION)
        if not confirmed:
            return False

        self.service.clear_all()
        self.render_contact_list()
        self.notifier.show(
            "All contacts have been deleted.", NotificationLevel.SUCCESS
        )
        return True


def create_contact_form_handler(backend: str | None = None) -> ContactFormHandler:
    """Wire storage, repository, service and handler from the environment.

    Args:
        backend: Storage backend name, defaults to CONTACTS_STORAGE_BACKEND

    Returns:
        ContactFormHandler with the list already rendered
    """
    backend = (backend or CONTACTS_STORAGE_BACKEND).lower()
    table = None
    if backend == "dynamodb":
        table = boto3.resource("dynamodb").Table(CONTACTS_TABLE)

    storage = create_storage(backend, path=CONTACTS_STORAGE_PATH, table=table)
    repository = ContactRepository(storage, storage_key=CONTACTS_STORAGE_KEY)
    logger.info(f"Contact storage: {backend} (key {CONTACTS_STORAGE_KEY})")
    return ContactFormHandler(ContactService(repository))
