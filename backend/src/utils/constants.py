"""Shared constants for the Contact Book backend."""

# Key the contact collection is stored under, the same key the browser
# widget uses for its local storage slot
DEFAULT_CONTACTS_STORAGE_KEY: str = "contactosConFramework"

# How long a status notification stays visible
DEFAULT_TOAST_DURATION_SECONDS: float = 4.0

# Most recent notifications kept by the notifier
TOAST_HISTORY_SIZE: int = 20

# Submit button labels for the contact form
SAVE_CONTACT_LABEL = "Save Contact"
UPDATE_CONTACT_LABEL = "Update Contact"

# List placeholders
EMPTY_CONTACT_LIST_MESSAGE = "No saved contacts."
MISSING_PHONE_LABEL = "N/A"
