"""Unit tests for CatalogService."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from canteen_mate.models.menu_models import MenuItem
from canteen_mate.models.result_models import ErrorCode
from canteen_mate.repositories.canteen_repositories import MenuItemRepository
from canteen_mate.services.catalog_service import DEFAULT_MENU_ITEMS, CatalogService
from canteen_mate.storage.kv_store import InMemoryKeyValueStore


@pytest.mark.unit
class TestCatalogService:
    """Test suite for CatalogService."""

    @pytest.mark.asyncio
    async def test_list_seeds_empty_catalog(
        self, catalog_service: CatalogService, store: InMemoryKeyValueStore
    ) -> None:
        """Test that the first listing seeds nine available items with ids 1..9."""
        result = await catalog_service.list_items()

        assert result.success is True
        assert [item.id for item in result.data] == list(range(1, 10))
        assert all(item.is_available for item in result.data)
        assert len(MenuItemRepository(store).load_all()) == 9

    @pytest.mark.asyncio
    async def test_list_does_not_reseed(self, store: InMemoryKeyValueStore, samosa: MenuItem) -> None:
        """Test that an existing catalog is returned as stored."""
        MenuItemRepository(store).save_all([samosa])
        service = CatalogService(menu_repository=MenuItemRepository(store))

        result = await service.list_items()

        assert result.data == [samosa]

    @pytest.mark.asyncio
    async def test_list_filters_by_category(self, catalog_service: CatalogService) -> None:
        result = await catalog_service.list_items("beverages")

        assert result.success is True
        assert {item.name for item in result.data} == {"Masala Chai", "Cold Coffee"}

    @pytest.mark.asyncio
    async def test_list_all_sentinel(self, catalog_service: CatalogService) -> None:
        result = await catalog_service.list_items("all")

        assert len(result.data) == 9

    @pytest.mark.asyncio
    async def test_list_unknown_category_is_empty(self, catalog_service: CatalogService) -> None:
        result = await catalog_service.list_items("brunch")

        assert result.success is True
        assert result.data == []

    @pytest.mark.asyncio
    async def test_list_unreadable_catalog(self) -> None:
        """Test that an unreadable catalog reports OPERATION_FAILED."""
        mock_repo = MagicMock(spec=MenuItemRepository)
        mock_repo.load_all.return_value = None
        service = CatalogService(menu_repository=mock_repo)

        result = await service.list_items()

        assert result.success is False
        assert result.error_code == ErrorCode.OPERATION_FAILED
        mock_repo.save_all.assert_not_called()

    @pytest.mark.asyncio
    async def test_seed_write_failure_still_serves_defaults(self) -> None:
        mock_repo = MagicMock(spec=MenuItemRepository)
        mock_repo.load_all.return_value = []
        mock_repo.save_all.return_value = False
        service = CatalogService(menu_repository=mock_repo)

        result = await service.list_items()

        assert result.success is True
        assert result.data == DEFAULT_MENU_ITEMS

    @pytest.mark.asyncio
    async def test_get_item(self, catalog_service: CatalogService) -> None:
        result = await catalog_service.get_item(3)

        assert result.success is True
        assert result.data.name == "Chicken Biryani"
        assert result.data.price == Decimal("150")

    @pytest.mark.asyncio
    async def test_get_item_not_found(self, catalog_service: CatalogService) -> None:
        result = await catalog_service.get_item(42)

        assert result.success is False
        assert result.error_code == ErrorCode.NOT_FOUND
        assert result.error == "Menu item not found"

    @pytest.mark.asyncio
    async def test_search_matches_name_and_description(self, catalog_service: CatalogService) -> None:
        by_name = await catalog_service.search_items("BIRYANI")
        by_description = await catalog_service.search_items("basmati")

        assert [item.id for item in by_name.data] == [3]
        assert [item.id for item in by_description.data] == [3]

    @pytest.mark.asyncio
    async def test_search_rice(self, catalog_service: CatalogService) -> None:
        result = await catalog_service.search_items("rice")

        assert {item.id for item in result.data} == {1, 3, 8, 9}

    @pytest.mark.asyncio
    async def test_search_no_match(self, catalog_service: CatalogService) -> None:
        result = await catalog_service.search_items("pizza")

        assert result.success is True
        assert result.data == []

    @pytest.mark.asyncio
    async def test_get_item_seeds_empty_catalog(
        self, catalog_service: CatalogService, store: InMemoryKeyValueStore
    ) -> None:
        """Test that a lookup on a fresh store sees the default menu."""
        result = await catalog_service.get_item(1)

        assert result.success is True
        assert result.data.name == "Masala Dosa"
        assert len(MenuItemRepository(store).load_all()) == 9

    @pytest.mark.asyncio
    async def test_search_seeds_empty_catalog(
        self, catalog_service: CatalogService, store: InMemoryKeyValueStore
    ) -> None:
        result = await catalog_service.search_items("dosa")

        assert [item.id for item in result.data] == [1]
        assert len(MenuItemRepository(store).load_all()) == 9

    @pytest.mark.asyncio
    async def test_get_item_unreadable_catalog(self) -> None:
        mock_repo = MagicMock(spec=MenuItemRepository)
        mock_repo.load_all.return_value = None
        service = CatalogService(menu_repository=mock_repo)

        result = await service.get_item(1)

        assert result.error_code == ErrorCode.OPERATION_FAILED
        mock_repo.save_all.assert_not_called()
