"""FastAPI application exposing the canteen services."""

import logging
from decimal import Decimal
from typing import Any, Literal

from fastapi import Depends, FastAPI, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from canteen_mate.auth.api_dependencies import require_staff_api_key
from canteen_mate.auth.api_key_validator import APIKeyValidator
from canteen_mate.models.order_models import CartItem
from canteen_mate.models.result_models import ErrorCode, ServiceResult
from canteen_mate.services.auth_service import AuthService
from canteen_mate.services.cart_service import CartService
from canteen_mate.services.catalog_service import CatalogService
from canteen_mate.services.contact_service import ContactService
from canteen_mate.services.order_service import OrderService

logger = logging.getLogger(__name__)

STATUS_BY_ERROR_CODE: dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.DUPLICATE_EMAIL: 409,
    ErrorCode.INVALID_TRANSITION: 409,
    ErrorCode.INVALID_ARGUMENT: 422,
    ErrorCode.OPERATION_FAILED: 500,
}


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class CartView(BaseModel):
    """Cart contents with derived totals."""

    items: list[CartItem]
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    item_count: int


class AddToCartRequest(BaseModel):
    item_id: int = Field(..., ge=1)
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    quantity: int


class CreateOrderRequest(BaseModel):
    """Items to order; when omitted the current cart is checked out."""

    items: list[CartItem] | None = None


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class ContactRequest(BaseModel):
    name: str
    email: str
    subject: str
    message: str


def to_response(result: ServiceResult[Any], success_status: int = 200) -> JSONResponse:
    """Render a service result, mapping its error code to an HTTP status."""
    if result.success:
        status_code = success_status
    else:
        status_code = STATUS_BY_ERROR_CODE.get(result.error_code or ErrorCode.OPERATION_FAILED, 500)

    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


def create_app(
    catalog_service: CatalogService,
    cart_service: CartService,
    order_service: OrderService,
    auth_service: AuthService,
    contact_service: ContactService,
    api_keys: list[str],
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        catalog_service: Service for the menu catalog
        cart_service: Service for the current cart
        order_service: Service for placing and tracking orders
        auth_service: Service for login, registration and identity
        contact_service: Service for contact form messages
        api_keys: List of valid staff API keys

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="CanteenMate API",
        description="Campus canteen menu, cart, ordering and contact API",
        version="1.0.0",
    )

    app.state.catalog_service = catalog_service
    app.state.cart_service = cart_service
    app.state.order_service = order_service
    app.state.auth_service = auth_service
    app.state.contact_service = contact_service
    app.state.api_key_validator = APIKeyValidator(api_keys=api_keys)

    def validate_api_key(x_api_key: str | None = Header(None)) -> str:
        """Dependency to validate the staff API key."""
        return require_staff_api_key(x_api_key=x_api_key, validator=app.state.api_key_validator)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        return HealthResponse(status="healthy")

    # Menu

    @app.get("/menu", tags=["Menu"])
    async def list_menu(category: str | None = None) -> JSONResponse:
        return to_response(await app.state.catalog_service.list_items(category))

    @app.get("/menu/search", tags=["Menu"])
    async def search_menu(q: str = "") -> JSONResponse:
        return to_response(await app.state.catalog_service.search_items(q))

    @app.get("/menu/{item_id}", tags=["Menu"])
    async def get_menu_item(item_id: int) -> JSONResponse:
        return to_response(await app.state.catalog_service.get_item(item_id))

    # Cart

    @app.get("/cart", tags=["Cart"])
    async def get_cart() -> JSONResponse:
        service: CartService = app.state.cart_service
        summary = service.summary(app.state.order_service.delivery_fee)
        view = CartView(
            items=service.get_cart(),
            subtotal=summary.subtotal,
            delivery_fee=summary.delivery_fee,
            total=summary.total,
            item_count=summary.item_count,
        )
        return to_response(ServiceResult.ok(view))

    @app.post("/cart/items", tags=["Cart"])
    async def add_to_cart(request: AddToCartRequest) -> JSONResponse:
        """Add a catalog item to the cart by id."""
        lookup = await app.state.catalog_service.get_item(request.item_id)
        if not lookup.success:
            return to_response(lookup)

        if not lookup.data.is_available:
            return to_response(
                ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, "Menu item is not available")
            )

        return to_response(await app.state.cart_service.add_to_cart(lookup.data, request.quantity))

    @app.put("/cart/items/{item_id}", tags=["Cart"])
    async def update_cart_item(item_id: int, request: UpdateCartItemRequest) -> JSONResponse:
        return to_response(await app.state.cart_service.update_cart_item(item_id, request.quantity))

    @app.delete("/cart/items/{item_id}", tags=["Cart"])
    async def remove_from_cart(item_id: int) -> JSONResponse:
        return to_response(await app.state.cart_service.remove_from_cart(item_id))

    @app.delete("/cart", tags=["Cart"])
    async def clear_cart() -> JSONResponse:
        return to_response(await app.state.cart_service.clear_cart())

    # Orders

    @app.post("/orders", tags=["Orders"])
    async def create_order(request: CreateOrderRequest | None = None) -> JSONResponse:
        """Place an order for the given items, or for the current cart."""
        service: OrderService = app.state.order_service
        if request is None or request.items is None:
            result = await service.checkout()
        else:
            result = await service.create_order(request.items)
        return to_response(result, success_status=201)

    @app.get("/orders", tags=["Orders"])
    async def list_orders(scope: Literal["all", "active", "history"] = "all") -> JSONResponse:
        service: OrderService = app.state.order_service
        if scope == "active":
            result = await service.list_active_for_user()
        elif scope == "history":
            result = await service.list_history_for_user()
        else:
            result = await service.list_for_user()
        return to_response(result)

    @app.get("/orders/{order_id}", tags=["Orders"])
    async def get_order(order_id: str) -> JSONResponse:
        return to_response(await app.state.order_service.get_order(order_id))

    @app.post("/orders/{order_id}/cancel", tags=["Orders"])
    async def cancel_order(order_id: str) -> JSONResponse:
        return to_response(await app.state.order_service.cancel_order(order_id))

    @app.post("/orders/{order_id}/reorder", tags=["Orders"])
    async def reorder(order_id: str) -> JSONResponse:
        return to_response(await app.state.order_service.reorder(order_id), success_status=201)

    # Auth

    @app.post("/auth/login", tags=["Auth"])
    async def login(request: LoginRequest) -> JSONResponse:
        return to_response(await app.state.auth_service.login(request.email, request.password))

    @app.post("/auth/register", tags=["Auth"])
    async def register(request: RegisterRequest) -> JSONResponse:
        result = await app.state.auth_service.register(request.name, request.email, request.password)
        return to_response(result, success_status=201)

    @app.post("/auth/logout", tags=["Auth"])
    async def logout() -> JSONResponse:
        return to_response(await app.state.auth_service.logout())

    @app.get("/auth/me", tags=["Auth"])
    async def current_user() -> JSONResponse:
        user = app.state.auth_service.get_current_user()
        if user is None:
            return to_response(ServiceResult.fail(ErrorCode.UNAUTHENTICATED, "User not authenticated"))
        return to_response(ServiceResult.ok(user))

    # Contact

    @app.post("/contact", tags=["Contact"])
    async def send_message(request: ContactRequest) -> JSONResponse:
        result = await app.state.contact_service.send_message(
            request.name, request.email, request.subject, request.message
        )
        return to_response(result, success_status=201)

    # Staff

    @app.get("/admin/contact-messages", tags=["Staff"])
    async def list_contact_messages(_api_key: str = Depends(validate_api_key)) -> JSONResponse:
        return to_response(await app.state.contact_service.get_messages())

    @app.post("/admin/orders/{order_id}/advance", tags=["Staff"])
    async def advance_order(order_id: str, _api_key: str = Depends(validate_api_key)) -> JSONResponse:
        logger.info(f"Staff status update requested for order {order_id}")
        return to_response(await app.state.order_service.advance_status(order_id))

    return app
