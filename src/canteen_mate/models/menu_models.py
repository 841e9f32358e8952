"""Menu data models.

These models represent the orderable catalog. Items are seeded once and are
never mutated afterwards, so the model is frozen.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ALL_CATEGORIES = "all"


class MenuCategory(str, Enum):
    """Enumeration of menu categories."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACKS = "snacks"
    BEVERAGES = "beverages"
    DESSERTS = "desserts"


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique identifier assigned when the catalog is seeded", ge=1)
    name: str = Field(..., description="Item name")
    price: Decimal = Field(..., description="Item price in rupees", ge=0)
    category: MenuCategory = Field(..., description="Category this item belongs to")
    image: str = Field(..., description="URI of the item image")
    description: str = Field(default="", description="Item description")
    is_veg: bool = Field(default=True, description="Whether the item is vegetarian")
    is_popular: bool = Field(default=False, description="Whether the item is featured as popular")
    is_available: bool = Field(default=True, description="Whether item is currently available")

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against name or description."""
        needle = query.lower()
        return needle in self.name.lower() or needle in self.description.lower()
