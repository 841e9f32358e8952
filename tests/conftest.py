"""Shared pytest fixtures and configuration for all tests."""

import os

# Must be set before main is imported anywhere
os.environ.setdefault("ENVIRONMENT", "test")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402

from canteen_mate.models.menu_models import MenuCategory, MenuItem  # noqa: E402
from canteen_mate.repositories.canteen_repositories import (  # noqa: E402
    CartRepository,
    ContactMessageRepository,
    CurrentUserRepository,
    MenuItemRepository,
    OrderRepository,
    UserRepository,
)
from canteen_mate.services.auth_service import AuthService  # noqa: E402
from canteen_mate.services.cart_service import CartService  # noqa: E402
from canteen_mate.services.catalog_service import CatalogService  # noqa: E402
from canteen_mate.services.contact_service import ContactService  # noqa: E402
from canteen_mate.services.order_service import OrderService  # noqa: E402
from canteen_mate.services.session import SessionContext  # noqa: E402
from canteen_mate.storage.kv_store import InMemoryKeyValueStore  # noqa: E402


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    """Fixture providing an empty in-memory store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def session(store: InMemoryKeyValueStore) -> SessionContext:
    return SessionContext(CurrentUserRepository(store))


@pytest.fixture
def catalog_service(store: InMemoryKeyValueStore) -> CatalogService:
    return CatalogService(menu_repository=MenuItemRepository(store))


@pytest.fixture
def cart_service(store: InMemoryKeyValueStore) -> CartService:
    return CartService(cart_repository=CartRepository(store))


@pytest.fixture
def order_service(
    store: InMemoryKeyValueStore, cart_service: CartService, session: SessionContext
) -> OrderService:
    return OrderService(
        order_repository=OrderRepository(store),
        cart_service=cart_service,
        session=session,
        delivery_fee=Decimal("20"),
    )


@pytest.fixture
def auth_service(store: InMemoryKeyValueStore, session: SessionContext) -> AuthService:
    return AuthService(user_repository=UserRepository(store), session=session)


@pytest.fixture
def contact_service(store: InMemoryKeyValueStore) -> ContactService:
    return ContactService(message_repository=ContactMessageRepository(store))


@pytest.fixture
def samosa() -> MenuItem:
    """Fixture providing a sample menu item priced at 25."""
    return MenuItem(
        id=2,
        name="Samosa",
        price=Decimal("25"),
        category=MenuCategory.SNACKS,
        image="https://example.com/samosa.jpg",
        description="Crispy pastry filled with spiced potatoes and peas",
        is_veg=True,
        is_popular=True,
    )


@pytest.fixture
def dosa() -> MenuItem:
    """Fixture providing a sample menu item priced at 80."""
    return MenuItem(
        id=1,
        name="Masala Dosa",
        price=Decimal("80"),
        category=MenuCategory.BREAKFAST,
        image="https://example.com/dosa.jpg",
        description="Crispy rice pancake served with potato filling",
    )
