"""Cart service for managing the single current cart."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from canteen_mate.models.menu_models import MenuItem
from canteen_mate.models.order_models import CartItem
from canteen_mate.models.result_models import ErrorCode, ServiceResult
from canteen_mate.observability import traced
from canteen_mate.observability.metrics import record_cart_mutation, record_store_write_failure
from canteen_mate.repositories.canteen_repositories import CartRepository

logger = logging.getLogger(__name__)


@dataclass
class CartSummary:
    """Totals shown alongside the cart.

    Attributes:
        subtotal: Sum of price x quantity over cart entries
        delivery_fee: Flat fee added at checkout
        total: Subtotal plus delivery fee
        item_count: Sum of quantities
    """

    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    item_count: int


def items_total(items: list[CartItem]) -> Decimal:
    """Sum price x quantity over cart items."""
    return sum((item.line_total for item in items), Decimal("0"))


class CartService:
    """Service for adding, updating and removing cart entries.

    Totals are derived from the stored cart on every call; the store is the
    only source of truth.
    """

    def __init__(self, cart_repository: CartRepository) -> None:
        """Initialize the CartService.

        Args:
            cart_repository: Repository for the current cart
        """
        self.cart_repository = cart_repository

    def get_cart(self) -> list[CartItem]:
        """Return the current cart; an unreadable cart reads as empty."""
        return self.cart_repository.load_all() or []

    def total(self) -> Decimal:
        return items_total(self.get_cart())

    def item_count(self) -> int:
        """Sum of quantities, not the number of distinct entries."""
        return sum(item.quantity for item in self.get_cart())

    def summary(self, delivery_fee: Decimal) -> CartSummary:
        cart = self.get_cart()
        subtotal = items_total(cart)
        return CartSummary(
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=subtotal + delivery_fee,
            item_count=sum(item.quantity for item in cart),
        )

    def _save(self, cart: list[CartItem], operation: str) -> bool:
        if self.cart_repository.save_all(cart):
            record_cart_mutation(operation)
            return True
        record_store_write_failure("cart")
        return False

    @traced("cart.add")
    async def add_to_cart(self, item: MenuItem, quantity: int = 1) -> ServiceResult[list[CartItem]]:
        """Add quantity units of a menu item to the cart.

        An existing entry with the same id has its quantity increased;
        otherwise a new entry is created from the item's current name,
        price and image.

        Args:
            item: Menu item to add
            quantity: Number of units to add, at least 1

        Returns:
            ServiceResult with the updated cart
        """
        if quantity < 1:
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, "Quantity must be at least 1")

        cart = self.cart_repository.load_all()
        if cart is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to add item to cart")

        for index, entry in enumerate(cart):
            if entry.id == item.id:
                cart[index] = entry.model_copy(update={"quantity": entry.quantity + quantity})
                break
        else:
            cart.append(CartItem.from_menu_item(item, quantity))

        if not self._save(cart, "add"):
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to add item to cart")

        return ServiceResult.ok(cart, message="Item added to cart")

    @traced("cart.update")
    async def update_cart_item(self, item_id: int, quantity: int) -> ServiceResult[list[CartItem]]:
        """Set the quantity of a cart entry; zero or less removes it.

        Args:
            item_id: Menu item id of the entry
            quantity: New quantity

        Returns:
            ServiceResult with the updated cart, or NOT_FOUND if the entry is absent
        """
        cart = self.cart_repository.load_all()
        if cart is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to update cart item")

        index = next((i for i, entry in enumerate(cart) if entry.id == item_id), None)
        if index is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, "Item not found in cart")

        if quantity <= 0:
            del cart[index]
        else:
            cart[index] = cart[index].model_copy(update={"quantity": quantity})

        if not self._save(cart, "update"):
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to update cart item")

        return ServiceResult.ok(cart)

    @traced("cart.remove")
    async def remove_from_cart(self, item_id: int) -> ServiceResult[list[CartItem]]:
        """Remove an entry from the cart. Removing an absent id is not an error."""
        cart = self.cart_repository.load_all()
        if cart is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to remove item from cart")

        updated_cart = [entry for entry in cart if entry.id != item_id]

        if not self._save(updated_cart, "remove"):
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to remove item from cart")

        return ServiceResult.ok(updated_cart, message="Item removed from cart")

    @traced("cart.clear")
    async def clear_cart(self) -> ServiceResult[None]:
        if not self._save([], "clear"):
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to clear cart")

        return ServiceResult.ok(message="Cart cleared")
