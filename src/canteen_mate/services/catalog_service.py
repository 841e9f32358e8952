"""Catalog service for browsing the canteen menu."""

import logging
from decimal import Decimal

from canteen_mate.models.menu_models import ALL_CATEGORIES, MenuCategory, MenuItem
from canteen_mate.models.result_models import ErrorCode, ServiceResult
from canteen_mate.observability import traced
from canteen_mate.repositories.canteen_repositories import MenuItemRepository
from canteen_mate.services.latency import LatencySimulator

logger = logging.getLogger(__name__)

DEFAULT_MENU_ITEMS: list[MenuItem] = [
    MenuItem(
        id=1,
        name="Masala Dosa",
        price=Decimal("80"),
        category=MenuCategory.BREAKFAST,
        image="https://images.pexels.com/photos/5560763/pexels-photo-5560763.jpeg",
        description="Crispy rice pancake served with potato filling, sambar and chutney",
        is_veg=True,
        is_popular=True,
    ),
    MenuItem(
        id=2,
        name="Samosa",
        price=Decimal("25"),
        category=MenuCategory.SNACKS,
        image="https://images.pexels.com/photos/9609838/pexels-photo-9609838.jpeg",
        description="Crispy pastry filled with spiced potatoes and peas",
        is_veg=True,
        is_popular=True,
    ),
    MenuItem(
        id=3,
        name="Chicken Biryani",
        price=Decimal("150"),
        category=MenuCategory.LUNCH,
        image="https://images.pexels.com/photos/7390558/pexels-photo-7390558.jpeg",
        description="Fragrant basmati rice cooked with tender chicken and aromatic spices",
        is_veg=False,
        is_popular=True,
    ),
    MenuItem(
        id=4,
        name="Paneer Butter Masala",
        price=Decimal("130"),
        category=MenuCategory.LUNCH,
        image="https://images.pexels.com/photos/3590401/pexels-photo-3590401.jpeg",
        description="Cottage cheese cubes in rich tomato and butter gravy",
        is_veg=True,
        is_popular=False,
    ),
    MenuItem(
        id=5,
        name="Masala Chai",
        price=Decimal("20"),
        category=MenuCategory.BEVERAGES,
        image="https://images.pexels.com/photos/5946630/pexels-photo-5946630.jpeg",
        description="Traditional Indian spiced tea with milk",
        is_veg=True,
        is_popular=False,
    ),
    MenuItem(
        id=6,
        name="Gulab Jamun",
        price=Decimal("40"),
        category=MenuCategory.DESSERTS,
        image="https://images.pexels.com/photos/7449105/pexels-photo-7449105.jpeg",
        description="Sweet milk solids balls soaked in sugar syrup",
        is_veg=True,
        is_popular=False,
    ),
    MenuItem(
        id=7,
        name="Cold Coffee",
        price=Decimal("60"),
        category=MenuCategory.BEVERAGES,
        image="https://images.pexels.com/photos/4271412/pexels-photo-4271412.jpeg",
        description="Refreshing cold coffee blended with ice and milk",
        is_veg=True,
        is_popular=False,
    ),
    MenuItem(
        id=8,
        name="Veg Pulao",
        price=Decimal("100"),
        category=MenuCategory.LUNCH,
        image="https://images.pexels.com/photos/5410422/pexels-photo-5410422.jpeg",
        description="Fragrant rice cooked with mixed vegetables and spices",
        is_veg=True,
        is_popular=False,
    ),
    MenuItem(
        id=9,
        name="Egg Fried Rice",
        price=Decimal("120"),
        category=MenuCategory.LUNCH,
        image="https://images.pexels.com/photos/723198/pexels-photo-723198.jpeg",
        description="Chinese style rice stir-fried with eggs and vegetables",
        is_veg=False,
        is_popular=True,
    ),
]


class CatalogService:
    """Service for listing, looking up and searching menu items.

    The catalog is read-only. It is seeded with the default menu the first
    time it is read while the store holds no items.
    """

    def __init__(
        self,
        menu_repository: MenuItemRepository,
        latency: LatencySimulator | None = None,
        default_items: list[MenuItem] | None = None,
    ) -> None:
        """Initialize the CatalogService.

        Args:
            menu_repository: Repository for stored menu items
            latency: Simulated network latency (none by default)
            default_items: Items seeded into an empty catalog
        """
        self.menu_repository = menu_repository
        self.latency = latency or LatencySimulator()
        self.default_items = DEFAULT_MENU_ITEMS if default_items is None else default_items

    def _ensure_seeded(self) -> list[MenuItem] | None:
        items = self.menu_repository.load_all()
        if items is None:
            return None

        if not items:
            logger.info(f"Seeding empty catalog with {len(self.default_items)} default items")
            items = list(self.default_items)
            if not self.menu_repository.save_all(items):
                logger.warning("Failed to persist seeded catalog, serving defaults from memory")

        return items

    @traced("menu.list")
    async def list_items(self, category: str | None = None) -> ServiceResult[list[MenuItem]]:
        """List menu items, optionally filtered by category.

        Args:
            category: Category value to filter by; None or "all" returns everything

        Returns:
            ServiceResult with the matching items
        """
        items = self._ensure_seeded()
        await self.latency.pause("menu.list")

        if items is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to fetch menu items")

        if category and category != ALL_CATEGORIES:
            items = [item for item in items if item.category.value == category]

        return ServiceResult.ok(items)

    @traced("menu.get")
    async def get_item(self, item_id: int) -> ServiceResult[MenuItem]:
        """Look up a single menu item by id."""
        items = self._ensure_seeded()
        if items is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to fetch menu item")

        for item in items:
            if item.id == item_id:
                return ServiceResult.ok(item)

        return ServiceResult.fail(ErrorCode.NOT_FOUND, "Menu item not found")

    @traced("menu.search")
    async def search_items(self, query: str) -> ServiceResult[list[MenuItem]]:
        """Search items whose name or description contains query, ignoring case."""
        await self.latency.pause("menu.search")

        items = self._ensure_seeded()
        if items is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Search failed")

        return ServiceResult.ok([item for item in items if item.matches(query)])
