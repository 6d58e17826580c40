"""Key-value storage backends for persisted collections.

Every backend follows browser local-storage semantics: values are strings,
reading an unknown key returns None, and removing an unknown key is a no-op.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A storage backend could not complete a read or write."""

    pass


class KeyValueStorage(ABC):
    """Durable string slots addressed by key."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value stored under key, or None."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing anything already there."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key."""


class InMemoryStorage(KeyValueStorage):
    """Process-local storage, mostly useful for tests."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class FileStorage(KeyValueStorage):
    """Storage backed by a single JSON object file.

    The file maps keys to string values and is rewritten whole on every write.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_file(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        try:
            items = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        if not isinstance(items, dict):
            logger.warning(
                "Ignoring storage file %s: expected a JSON object, got %s",
                self.path,
                type(items).__name__,
            )
            return {}
        return items

    def _write_file(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling file first so readers never see a partial write
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def get_item(self, key: str) -> str | None:
        return self._read_file().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_file()
        items[key] = value
        self._write_file(items)

    def remove_item(self, key: str) -> None:
        items = self._read_file()
        if key in items:
            del items[key]
            self._write_file(items)


class DynamoDBStorage(KeyValueStorage):
    """Storage backed by a DynamoDB table with one item per key."""

    KEY_ATTRIBUTE = "storage_key"
    VALUE_ATTRIBUTE = "value"

    def __init__(self, table):
        """Initialize the storage.

        Args:
            table: DynamoDB table keyed on ``storage_key``
        """
        self.table = table

    def get_item(self, key: str) -> str | None:
        try:
            response = self.table.get_item(Key={self.KEY_ATTRIBUTE: key})
        except ClientError as e:
            logger.error("Failed to read storage key %s: %s", key, e)
            raise StorageError(f"Failed to read {key}: {e}") from e

        item = response.get("Item")
        if not item:
            return None
        return item.get(self.VALUE_ATTRIBUTE)

    def set_item(self, key: str, value: str) -> None:
        try:
            self.table.put_item(
                Item={self.KEY_ATTRIBUTE: key, self.VALUE_ATTRIBUTE: value}
            )
        except ClientError as e:
            logger.error("Failed to write storage key %s: %s", key, e)
            raise StorageError(f"Failed to write {key}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self.table.delete_item(Key={self.KEY_ATTRIBUTE: key})
        except ClientError as e:
            logger.error("Failed to remove storage key %s: %s", key, e)
            raise StorageError(f"Failed to remove {key}: {e}") from e


def create_storage(
    backend: str,
    path: str | Path | None = None,
    table=None,
) -> KeyValueStorage:
    """Create a storage backend by name.

    Args:
        backend: One of ``memory``, ``file`` or ``dynamodb``
        path: JSON file location for the ``file`` backend
        table: DynamoDB table for the ``dynamodb`` backend

    Returns:
        KeyValueStorage instance

    Raises:
        ValueError: If the backend is unknown or missing its settings
    """
    backend = backend.lower()
    if backend == "memory":
        return InMemoryStorage()
    if backend == "file":
        if path is None:
            raise ValueError("File storage requires a path")
        return FileStorage(path)
    if backend == "dynamodb":
        if table is None:
            raise ValueError("DynamoDB storage requires a table")
        return DynamoDBStorage(table)
    raise ValueError(f"Unknown storage backend: {backend}")
