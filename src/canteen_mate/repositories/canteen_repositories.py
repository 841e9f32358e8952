"""Repository classes over the key-value store.

Each repository owns one storage namespace and converts between stored JSON
and the pydantic models. Following the store's contract, we use simple
return values (None/False) for expected failures rather than raising
exceptions: a read returns None when the stored records cannot be parsed,
and a write returns False when the store dropped it.
"""

import logging
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from canteen_mate.models.menu_models import MenuItem
from canteen_mate.models.order_models import CartItem, Order
from canteen_mate.models.user_models import ContactMessage, User
from canteen_mate.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class StorageKey(str, Enum):
    """Keys of the six logical storage namespaces."""

    USERS = "canteen_users"
    MENU_ITEMS = "canteen_menu_items"
    ORDERS = "canteen_orders"
    CART = "canteen_cart"
    CONTACT_MESSAGES = "canteen_contact_messages"
    CURRENT_USER = "user"


class RecordListRepository(Generic[ModelT]):
    """Repository for a namespace holding a JSON array of records."""

    model: type[ModelT]
    storage_key: StorageKey

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize repository.

        Args:
            store: Key-value store holding the namespace
        """
        self.store = store

    def load_all(self) -> list[ModelT] | None:
        """Load every record in the namespace.

        Returns:
            list: Stored records in stored order (empty list if none),
            or None if the stored data could not be parsed
        """
        raw_records: Any = self.store.get(self.storage_key.value, [])
        if not isinstance(raw_records, list):
            logger.error(f"Expected a list under {self.storage_key.value}, got {type(raw_records).__name__}")
            return None

        try:
            return [self.model.model_validate(record) for record in raw_records]
        except ValidationError as e:
            logger.error(f"Failed to parse records under {self.storage_key.value}: {e}")
            return None

    def save_all(self, records: list[ModelT]) -> bool:
        """Replace the namespace with the given records.

        Returns:
            bool: True if save succeeded, False otherwise
        """
        return self.store.set(
            self.storage_key.value, [record.model_dump(mode="json") for record in records]
        )


class MenuItemRepository(RecordListRepository[MenuItem]):
    """Repository for the menu catalog."""

    model = MenuItem
    storage_key = StorageKey.MENU_ITEMS


class CartRepository(RecordListRepository[CartItem]):
    """Repository for the single current cart."""

    model = CartItem
    storage_key = StorageKey.CART

    def clear(self) -> bool:
        return self.save_all([])


class OrderRepository(RecordListRepository[Order]):
    """Repository for orders, kept newest first."""

    model = Order
    storage_key = StorageKey.ORDERS


class UserRepository(RecordListRepository[User]):
    """Repository for registered users."""

    model = User
    storage_key = StorageKey.USERS


class ContactMessageRepository(RecordListRepository[ContactMessage]):
    """Repository for contact messages, kept newest first."""

    model = ContactMessage
    storage_key = StorageKey.CONTACT_MESSAGES


class CurrentUserRepository:
    """Repository for the current-user pointer (a single object or absent)."""

    def __init__(self, store: KeyValueStore, storage_key: str = StorageKey.CURRENT_USER.value) -> None:
        """Initialize repository.

        Args:
            store: Key-value store holding the pointer
            storage_key: Key of the pointer, distinct per session
        """
        self.store = store
        self.storage_key = storage_key

    def get(self) -> User | None:
        """Return the stored current user, or None if absent or unreadable."""
        raw_user = self.store.get(self.storage_key, None)
        if raw_user is None:
            return None

        try:
            return User.model_validate(raw_user)
        except ValidationError as e:
            logger.error(f"Failed to parse current user: {e}")
            return None

    def save(self, user: User) -> bool:
        return self.store.set(self.storage_key, user.model_dump(mode="json"))

    def clear(self) -> bool:
        return self.store.delete(self.storage_key)
