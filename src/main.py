"""Main application entry point for the CanteenMate service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os
from decimal import Decimal, InvalidOperation
from typing import Any

import boto3
from fastapi import FastAPI

from canteen_mate.handlers.api_handler import create_app
from canteen_mate.observability import configure_logging, setup_observability
from canteen_mate.repositories.canteen_repositories import (
    CartRepository,
    ContactMessageRepository,
    CurrentUserRepository,
    MenuItemRepository,
    OrderRepository,
    UserRepository,
)
from canteen_mate.services.auth_service import AuthService
from canteen_mate.services.cart_service import CartService
from canteen_mate.services.catalog_service import CatalogService
from canteen_mate.services.contact_service import ContactService
from canteen_mate.services.latency import LatencySimulator
from canteen_mate.services.order_service import DEFAULT_DELIVERY_FEE, OrderService
from canteen_mate.services.session import SessionContext
from canteen_mate.storage.kv_store import (
    DynamoDBKeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    NullKeyValueStore,
)

logger = logging.getLogger(__name__)


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )

    logger.info(f"Using AWS DynamoDB in region {region}")
    return boto3.resource("dynamodb", region_name=region)


def create_store() -> KeyValueStore:
    """Create the key-value store selected by CANTEEN_STORE_BACKEND.

    Returns:
        Configured KeyValueStore

    Raises:
        ValueError: If the backend name is not recognised
    """
    backend = os.getenv("CANTEEN_STORE_BACKEND", "memory").lower()

    if backend == "memory":
        logger.info("Using in-memory store")
        return InMemoryKeyValueStore()

    if backend == "file":
        path = os.getenv("CANTEEN_STORE_PATH", "canteen_store.json")
        logger.info(f"Using JSON file store at {path}")
        return JsonFileKeyValueStore(path)

    if backend == "dynamodb":
        table_name = os.getenv("DYNAMODB_STORE_TABLE", "canteen-store")
        logger.info(f"Using DynamoDB store table {table_name}")
        return DynamoDBKeyValueStore(dynamodb_resource=get_dynamodb_resource(), table_name=table_name)

    if backend == "null":
        logger.warning("Using null store - nothing will be persisted")
        return NullKeyValueStore()

    raise ValueError(f"Unknown CANTEEN_STORE_BACKEND: {backend}")


def get_delivery_fee() -> Decimal:
    """Read the flat delivery fee from DELIVERY_FEE."""
    raw_fee = os.getenv("DELIVERY_FEE")
    if raw_fee is None:
        return DEFAULT_DELIVERY_FEE

    try:
        fee = Decimal(raw_fee)
    except InvalidOperation as e:
        raise ValueError(f"DELIVERY_FEE must be a number, got {raw_fee!r}") from e

    if fee < 0:
        raise ValueError("DELIVERY_FEE must be non-negative")
    return fee


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the key-value store
    3. Initializes repositories and the session context
    4. Creates services
    5. Creates FastAPI app
    6. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing CanteenMate service...")

    store = create_store()

    session = SessionContext(CurrentUserRepository(store))
    latency = LatencySimulator(scale=float(os.getenv("SIMULATED_LATENCY_SCALE", "0")))
    delivery_fee = get_delivery_fee()

    catalog_service = CatalogService(menu_repository=MenuItemRepository(store), latency=latency)
    cart_service = CartService(cart_repository=CartRepository(store))
    order_service = OrderService(
        order_repository=OrderRepository(store),
        cart_service=cart_service,
        session=session,
        delivery_fee=delivery_fee,
        latency=latency,
    )
    auth_service = AuthService(user_repository=UserRepository(store), session=session, latency=latency)
    contact_service = ContactService(
        message_repository=ContactMessageRepository(store), latency=latency
    )

    logger.info(f"Services initialized - delivery fee: {delivery_fee}, latency scale: {latency.scale}")

    api_keys_str = os.getenv("ADMIN_API_KEY", "")
    api_keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - staff endpoints will not be accessible")
        api_keys = ["dummy-key-for-development"]

    app = create_app(
        catalog_service=catalog_service,
        cart_service=cart_service,
        order_service=order_service,
        auth_service=auth_service,
        contact_service=contact_service,
        api_keys=api_keys,
    )

    setup_observability(app)

    logger.info("CanteenMate service initialized successfully")

    return app


# Skip building the real app during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
