"""Cart and order models.

A CartItem is a snapshot of a menu item taken at add-time; orders copy those
snapshots so later catalog or cart changes never reach a placed order.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from canteen_mate.models.menu_models import MenuItem


class CartItem(BaseModel):
    """An entry of the current cart, keyed by menu item id."""

    id: int = Field(..., description="Menu item identifier", ge=1)
    name: str = Field(..., description="Item name at add-time")
    price: Decimal = Field(..., description="Unit price at add-time", ge=0)
    quantity: int = Field(..., description="Number of units", ge=1)
    image: str = Field(default="", description="URI of the item image")

    @classmethod
    def from_menu_item(cls, item: MenuItem, quantity: int) -> "CartItem":
        """Snapshot a menu item into a cart entry."""
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            quantity=quantity,
            image=item.image,
        )

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class OrderStatusEnum(str, Enum):
    """Enumeration of order status values."""

    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_STATUSES = frozenset({OrderStatusEnum.PREPARING, OrderStatusEnum.READY})

# Forward transitions driven by kitchen staff
_NEXT_STATUS = {
    OrderStatusEnum.PREPARING: OrderStatusEnum.READY,
    OrderStatusEnum.READY: OrderStatusEnum.COMPLETED,
}

ESTIMATED_TIME_ON_PLACEMENT = "15-20 min"
ESTIMATED_TIME_WHEN_READY = "Ready for pickup"


class Order(BaseModel):
    """A placed order.

    The total is computed once at creation time (items plus delivery fee)
    and is never recomputed.
    """

    id: str = Field(..., description="Unique order identifier")
    user_id: str = Field(..., description="User who placed the order")
    items: list[CartItem] = Field(..., description="Snapshot of the ordered items", min_length=1)
    total: Decimal = Field(..., description="Item total plus delivery fee", ge=0)
    status: OrderStatusEnum = Field(..., description="Current order status")
    created_at: datetime = Field(..., description="Order creation timestamp")
    estimated_time: str | None = Field(None, description="Human readable pickup estimate")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def can_cancel(self) -> bool:
        """Cancellation is allowed from any non-terminal status."""
        return self.status in ACTIVE_STATUSES

    def next_status(self) -> OrderStatusEnum | None:
        """Return the status following the current one, or None if terminal."""
        return _NEXT_STATUS.get(self.status)
