"""Order service for placing and tracking canteen orders."""

import logging
import uuid
from datetime import UTC, datetime
from decimal import Decimal

from canteen_mate.models.order_models import (
    ESTIMATED_TIME_ON_PLACEMENT,
    ESTIMATED_TIME_WHEN_READY,
    CartItem,
    Order,
    OrderStatusEnum,
)
from canteen_mate.models.result_models import ErrorCode, ServiceResult
from canteen_mate.observability import traced
from canteen_mate.observability.metrics import (
    record_order_cancelled,
    record_order_created,
    record_store_write_failure,
)
from canteen_mate.repositories.canteen_repositories import OrderRepository
from canteen_mate.services.cart_service import CartService, items_total
from canteen_mate.services.latency import LatencySimulator
from canteen_mate.services.session import SessionContext

logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_FEE = Decimal("20")


class OrderService:
    """Service for turning cart snapshots into orders and managing their status.

    Order status moves preparing -> ready -> completed, and any non-terminal
    order can be cancelled. Completed and cancelled orders are terminal.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        cart_service: CartService,
        session: SessionContext,
        delivery_fee: Decimal = DEFAULT_DELIVERY_FEE,
        latency: LatencySimulator | None = None,
    ) -> None:
        """Initialize the OrderService.

        Args:
            order_repository: Repository for stored orders
            cart_service: Cart cleared once an order is placed
            session: Session context identifying the acting user
            delivery_fee: Flat fee added to every order total
            latency: Simulated network latency (none by default)
        """
        self.order_repository = order_repository
        self.cart_service = cart_service
        self.session = session
        self.delivery_fee = delivery_fee
        self.latency = latency or LatencySimulator()

    @traced("orders.create")
    async def create_order(self, items: list[CartItem]) -> ServiceResult[Order]:
        """Place an order for items and clear the cart.

        Both writes happen as one unit: if clearing the cart fails, the new
        order is rolled back out of the order list.

        Args:
            items: Cart entries to order; copied into the order

        Returns:
            ServiceResult with the new order, or UNAUTHENTICATED without a current user
        """
        user = self.session.current_user
        if user is None:
            return ServiceResult.fail(ErrorCode.UNAUTHENTICATED, "User not authenticated")

        if not items:
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, "Cannot place an empty order")

        await self.latency.pause("orders.create")

        previous_orders = self.order_repository.load_all()
        if previous_orders is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to create order")

        order = Order(
            id=f"ord_{uuid.uuid4().hex[:12]}",
            user_id=user.id,
            items=[item.model_copy() for item in items],
            total=items_total(items) + self.delivery_fee,
            status=OrderStatusEnum.PREPARING,
            created_at=datetime.now(UTC),
            estimated_time=ESTIMATED_TIME_ON_PLACEMENT,
        )

        if not self.order_repository.save_all([order, *previous_orders]):
            record_store_write_failure("orders")
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to create order")

        cleared = await self.cart_service.clear_cart()
        if not cleared.success:
            logger.error(f"Failed to clear cart after placing order {order.id}, rolling back")
            if not self.order_repository.save_all(previous_orders):
                logger.error(f"Rollback of order {order.id} failed")
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to create order")

        logger.info(f"Order {order.id} placed by user {user.id} for {order.total}")
        record_order_created(order.total, sum(item.quantity for item in order.items))

        return ServiceResult.ok(order, message="Order placed successfully")

    async def checkout(self) -> ServiceResult[Order]:
        """Place an order for the current cart contents."""
        return await self.create_order(self.cart_service.get_cart())

    async def _orders_for_current_user(self) -> ServiceResult[list[Order]]:
        user = self.session.current_user
        if user is None:
            return ServiceResult.fail(ErrorCode.UNAUTHENTICATED, "User not authenticated")

        await self.latency.pause("orders.list")

        orders = self.order_repository.load_all()
        if orders is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to fetch orders")

        return ServiceResult.ok([order for order in orders if order.user_id == user.id])

    @traced("orders.list")
    async def list_for_user(self) -> ServiceResult[list[Order]]:
        """List the current user's orders, newest first."""
        return await self._orders_for_current_user()

    @traced("orders.list_active")
    async def list_active_for_user(self) -> ServiceResult[list[Order]]:
        """List the current user's preparing and ready orders, newest first."""
        result = await self._orders_for_current_user()
        if not result.success or result.data is None:
            return result
        return ServiceResult.ok([order for order in result.data if order.is_active])

    @traced("orders.list_history")
    async def list_history_for_user(self) -> ServiceResult[list[Order]]:
        """List the current user's completed and cancelled orders, newest first."""
        result = await self._orders_for_current_user()
        if not result.success or result.data is None:
            return result
        return ServiceResult.ok([order for order in result.data if not order.is_active])

    @traced("orders.get")
    async def get_order(self, order_id: str) -> ServiceResult[Order]:
        orders = self.order_repository.load_all()
        if orders is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to fetch order")

        for order in orders:
            if order.id == order_id:
                return ServiceResult.ok(order)

        return ServiceResult.fail(ErrorCode.NOT_FOUND, "Order not found")

    def _locate_order(
        self, order_id: str, failure_message: str
    ) -> tuple[list[Order], int] | ServiceResult[Order]:
        orders = self.order_repository.load_all()
        if orders is None:
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, failure_message)

        index = next((i for i, order in enumerate(orders) if order.id == order_id), None)
        if index is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, "Order not found")

        return orders, index

    @traced("orders.cancel")
    async def cancel_order(self, order_id: str) -> ServiceResult[Order]:
        """Cancel an order unless it is already completed.

        Returns:
            ServiceResult with the cancelled order, NOT_FOUND, or
            INVALID_TRANSITION for completed orders
        """
        located = self._locate_order(order_id, "Failed to cancel order")
        if isinstance(located, ServiceResult):
            return located
        orders, index = located

        order = orders[index]
        if order.status == OrderStatusEnum.CANCELLED:
            return ServiceResult.ok(order, message="Order already cancelled")

        if not order.can_cancel:
            return ServiceResult.fail(
                ErrorCode.INVALID_TRANSITION, f"Cannot cancel {order.status.value} order"
            )

        cancelled = order.model_copy(update={"status": OrderStatusEnum.CANCELLED})
        orders[index] = cancelled

        if not self.order_repository.save_all(orders):
            record_store_write_failure("orders")
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to cancel order")

        logger.info(f"Order {order_id} cancelled from status {order.status.value}")
        record_order_cancelled(order.status.value)

        return ServiceResult.ok(cancelled, message="Order cancelled successfully")

    @traced("orders.advance")
    async def advance_status(self, order_id: str) -> ServiceResult[Order]:
        """Move an order to its next kitchen status (preparing -> ready -> completed).

        Returns:
            ServiceResult with the updated order, NOT_FOUND, or
            INVALID_TRANSITION for completed or cancelled orders
        """
        located = self._locate_order(order_id, "Failed to update order status")
        if isinstance(located, ServiceResult):
            return located
        orders, index = located

        order = orders[index]
        next_status = order.next_status()
        if next_status is None:
            return ServiceResult.fail(
                ErrorCode.INVALID_TRANSITION,
                f"Cannot advance {order.status.value} order",
            )

        estimated_time = ESTIMATED_TIME_WHEN_READY if next_status == OrderStatusEnum.READY else None
        advanced = order.model_copy(update={"status": next_status, "estimated_time": estimated_time})
        orders[index] = advanced

        if not self.order_repository.save_all(orders):
            record_store_write_failure("orders")
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to update order status")

        logger.info(f"Order {order_id} advanced from {order.status.value} to {next_status.value}")

        return ServiceResult.ok(advanced, message=f"Order marked {next_status.value}")

    @traced("orders.reorder")
    async def reorder(self, order_id: str) -> ServiceResult[Order]:
        """Place a new order with the items of an earlier one."""
        original = await self.get_order(order_id)
        if not original.success or original.data is None:
            if original.error_code == ErrorCode.NOT_FOUND:
                return ServiceResult.fail(ErrorCode.NOT_FOUND, "Original order not found")
            return ServiceResult.fail(ErrorCode.OPERATION_FAILED, "Failed to reorder")

        return await self.create_order(original.data.items)
