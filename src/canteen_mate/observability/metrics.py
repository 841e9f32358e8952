"""Custom metrics for the canteen ordering service."""

from decimal import Decimal

from opentelemetry import metrics

meter = metrics.get_meter("canteen-mate")

orders_created_counter = meter.create_counter(
    name="orders_created_total",
    description="Total number of orders placed",
    unit="1",
)

orders_cancelled_counter = meter.create_counter(
    name="orders_cancelled_total",
    description="Total number of orders cancelled",
    unit="1",
)

cart_mutations_counter = meter.create_counter(
    name="cart_mutations_total",
    description="Total number of cart changes by operation",
    unit="1",
)

store_write_failures_counter = meter.create_counter(
    name="store_write_failures_total",
    description="Writes dropped by the key-value store, by namespace",
    unit="1",
)

order_value_histogram = meter.create_histogram(
    name="order_value",
    description="Total value of placed orders including delivery fee",
    unit="INR",
)


def record_order_created(total: Decimal, item_count: int) -> None:
    """Record a placed order.

    Args:
        total: Order total including delivery fee
        item_count: Number of units in the order
    """
    orders_created_counter.add(1, {"size": "single" if item_count == 1 else "multi"})
    order_value_histogram.record(float(total))


def record_order_cancelled(previous_status: str) -> None:
    orders_cancelled_counter.add(1, {"previous_status": previous_status})


def record_cart_mutation(operation: str) -> None:
    """Record a cart change.

    Args:
        operation: The cart operation (e.g., "add", "update", "remove", "clear")
    """
    cart_mutations_counter.add(1, {"operation": operation})


def record_store_write_failure(namespace: str) -> None:
    store_write_failures_counter.add(1, {"namespace": namespace})
