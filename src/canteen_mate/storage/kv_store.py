"""Key-value store adapters.

Every persistent read and write in the service goes through a KeyValueStore.
Values are stored as JSON text, so reads hand back fresh copies.

Following the repository pattern used elsewhere in the service, expected
failures are reported through return values rather than exceptions:
- get returns the caller's default when a key is missing or unreadable
- set and delete return False when the write is lost

Concurrent writers to the same key are not coordinated: the last write wins.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Abstract base class for JSON key-value stores.

    Subclasses implement raw text access and declare which exceptions their
    backend raises; those are logged and absorbed here.
    """

    backend_errors: tuple[type[Exception], ...] = ()

    def get(self, key: str, default: Any = None) -> Any:
        """Read and deserialize the value stored under key.

        Args:
            key: Storage key
            default: Value returned when the key is missing or unreadable

        Returns:
            The stored value, or default
        """
        try:
            raw = self._read(key)
        except self.backend_errors as e:
            logger.error(f"Failed to read key {key}: {e}")
            return default

        if raw is None:
            return default

        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unreadable value under key {key}: {e}")
            return default

    def set(self, key: str, value: Any) -> bool:
        """Serialize and store value under key.

        Args:
            key: Storage key
            value: JSON-serializable value

        Returns:
            bool: True if the write succeeded, False if it was dropped
        """
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize value for key {key}: {e}")
            return False

        try:
            self._write(key, raw)
            return True
        except self.backend_errors as e:
            logger.error(f"Failed to write key {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Remove key from the store. Deleting a missing key succeeds.

        Returns:
            bool: True if the delete succeeded, False otherwise
        """
        try:
            self._delete(key)
            return True
        except self.backend_errors as e:
            logger.error(f"Failed to delete key {key}: {e}")
            return False

    @abstractmethod
    def _read(self, key: str) -> str | None:
        """Return the raw JSON text under key, or None if absent."""

    @abstractmethod
    def _write(self, key: str, raw: str) -> None:
        """Store raw JSON text under key."""

    @abstractmethod
    def _delete(self, key: str) -> None:
        """Remove key if present."""


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. State lives as long as the instance."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def _read(self, key: str) -> str | None:
        return self._data.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def _delete(self, key: str) -> None:
        self._data.pop(key, None)


class NullKeyValueStore(KeyValueStore):
    """Default-only store used when no persistent storage is reachable.

    Reads always yield the caller's default; writes are accepted and discarded.
    """

    def _read(self, key: str) -> str | None:
        return None

    def _write(self, key: str, raw: str) -> None:
        logger.debug(f"Discarding write to {key}, no persistent store configured")

    def _delete(self, key: str) -> None:
        pass


class JsonFileKeyValueStore(KeyValueStore):
    """Store backed by a single JSON document on disk.

    The document maps keys to raw JSON text. Writes replace the whole file
    atomically via a temporary file in the same directory.
    """

    backend_errors = (OSError, ValueError)

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document; created on first write
        """
        self.path = Path(path)

    def _load_document(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            document = json.load(f)
        if not isinstance(document, dict):
            raise ValueError(f"Store document {self.path} is not a JSON object")
        return document

    def _save_document(self, document: dict[str, str]) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f)
            os.replace(tmp_path, self.path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def _read(self, key: str) -> str | None:
        return self._load_document().get(key)

    def _write(self, key: str, raw: str) -> None:
        document = self._load_document()
        document[key] = raw
        self._save_document(document)

    def _delete(self, key: str) -> None:
        document = self._load_document()
        if document.pop(key, None) is not None:
            self._save_document(document)


class DynamoDBKeyValueStore(KeyValueStore):
    """Store backed by a DynamoDB table.

    The table uses ``key`` as partition key and keeps the JSON text in a
    ``value`` string attribute.
    """

    backend_errors = (ClientError, BotoCoreError)

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize the store.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def _read(self, key: str) -> str | None:
        response = self.table.get_item(Key={"key": key})
        if "Item" not in response:
            return None
        return str(response["Item"]["value"])

    def _write(self, key: str, raw: str) -> None:
        self.table.put_item(Item={"key": key, "value": raw})

    def _delete(self, key: str) -> None:
        self.table.delete_item(Key={"key": key})
