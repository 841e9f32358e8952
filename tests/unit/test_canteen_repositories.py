"""Unit tests for canteen repository classes."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from canteen_mate.models.menu_models import MenuItem
from canteen_mate.models.order_models import CartItem
from canteen_mate.models.user_models import User
from canteen_mate.repositories.canteen_repositories import (
    CartRepository,
    CurrentUserRepository,
    MenuItemRepository,
    StorageKey,
)
from canteen_mate.storage.kv_store import InMemoryKeyValueStore, KeyValueStore


@pytest.mark.unit
class TestRecordListRepository:
    """Test suite for list-backed repositories."""

    def test_load_all_empty(self, store: InMemoryKeyValueStore) -> None:
        assert CartRepository(store).load_all() == []

    def test_save_and_load(self, store: InMemoryKeyValueStore, samosa: MenuItem) -> None:
        repository = MenuItemRepository(store)

        assert repository.save_all([samosa]) is True
        assert repository.load_all() == [samosa]

    def test_saves_under_namespace_key(self, store: InMemoryKeyValueStore) -> None:
        CartRepository(store).save_all([CartItem(id=2, name="Samosa", price=Decimal("25"), quantity=1)])

        raw = store.get(StorageKey.CART.value)
        assert raw == [{"id": 2, "name": "Samosa", "price": "25", "quantity": 1, "image": ""}]

    def test_load_all_invalid_records(self, store: InMemoryKeyValueStore) -> None:
        """Test that records failing validation return None."""
        store.set(StorageKey.CART.value, [{"id": 2, "quantity": "many"}])

        assert CartRepository(store).load_all() is None

    def test_load_all_non_list(self, store: InMemoryKeyValueStore) -> None:
        store.set(StorageKey.CART.value, {"id": 2})

        assert CartRepository(store).load_all() is None

    def test_save_all_store_failure(self) -> None:
        """Test that a dropped write returns False."""
        mock_store = MagicMock(spec=KeyValueStore)
        mock_store.set.return_value = False

        assert CartRepository(mock_store).save_all([]) is False

    def test_clear_cart(self, store: InMemoryKeyValueStore) -> None:
        repository = CartRepository(store)
        repository.save_all([CartItem(id=2, name="Samosa", price=Decimal("25"), quantity=1)])

        assert repository.clear() is True
        assert repository.load_all() == []


@pytest.mark.unit
class TestCurrentUserRepository:
    """Test suite for CurrentUserRepository."""

    @pytest.fixture
    def user(self) -> User:
        return User(
            id="usr_1",
            email="student@campus.edu",
            name="Student",
            is_logged_in=True,
            created_at=datetime.now(UTC),
        )

    def test_get_absent(self, store: InMemoryKeyValueStore) -> None:
        assert CurrentUserRepository(store).get() is None

    def test_save_get_clear(self, store: InMemoryKeyValueStore, user: User) -> None:
        repository = CurrentUserRepository(store)

        assert repository.save(user) is True
        assert repository.get() == user
        assert store.get(StorageKey.CURRENT_USER.value)["email"] == "student@campus.edu"

        assert repository.clear() is True
        assert repository.get() is None

    def test_get_invalid_record(self, store: InMemoryKeyValueStore) -> None:
        store.set(StorageKey.CURRENT_USER.value, {"id": "usr_1"})

        assert CurrentUserRepository(store).get() is None

    def test_custom_key_is_isolated(self, store: InMemoryKeyValueStore, user: User) -> None:
        CurrentUserRepository(store, storage_key="user:tab-2").save(user)

        assert CurrentUserRepository(store).get() is None
        assert CurrentUserRepository(store, storage_key="user:tab-2").get() == user
