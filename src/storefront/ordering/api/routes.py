"""FastAPI endpoints for the shopping cart and customer orders."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.errors import EmptyCart, InvalidRequest, NotFound
from storefront.ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    CartSchema,
    OrderListResponse,
    OrderResponse,
    OrderSchema,
    OrderStatsSchema,
    OrderStatusResponse,
    OrderSummarySchema,
    PaginationSchema,
    PlaceOrderRequest,
    StockValidationResponse,
    UnavailableItemSchema,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.ordering.cart.management import ClearCart, get_or_create_cart
from storefront.ordering.cart.stock import validate_cart_stock
from storefront.ordering.order.order import Actor, Order
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.queries import DEFAULT_PAGE_SIZE, order_stats
from storefront.ordering.order.status import UpdateOrderStatus
from storefront.web.session import current_customer_id

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _cart_response(customer_id: str, message: str | None = None) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).find_for_customer(customer_id)
    return CartResponse(message=message, cart=CartSchema.from_cart(cart))


def _existing_cart(customer_id: str) -> ShoppingCart:
    cart = current_domain.repository_for(ShoppingCart).find_for_customer(customer_id)
    if cart is None:
        raise NotFound("Cart not found")
    return cart


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=CartResponse)
async def get_cart(customer_id: str = Depends(current_customer_id)) -> CartResponse:
    cart = get_or_create_cart(customer_id)
    return CartResponse(cart=CartSchema.from_cart(cart))


@cart_router.post("", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, customer_id: str = Depends(current_customer_id)) -> CartResponse:
    if not body.product_id:
        raise InvalidRequest("Product ID is required")
    if body.quantity < 1:
        raise InvalidRequest("Quantity must be at least 1")

    cart = get_or_create_cart(customer_id)
    command = AddToCart(
        cart_id=str(cart.id),
        product_id=body.product_id,
        quantity=body.quantity,
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(customer_id, message="Item added to cart successfully")


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(customer_id: str = Depends(current_customer_id)) -> CartResponse:
    cart = get_or_create_cart(customer_id)
    current_domain.process(ClearCart(cart_id=str(cart.id)), asynchronous=False)
    return _cart_response(customer_id, message="Cart cleared successfully")


@cart_router.patch("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    customer_id: str = Depends(current_customer_id),
) -> CartResponse:
    if body.quantity < 0:
        raise InvalidRequest("Quantity cannot be negative")

    cart = _existing_cart(customer_id)
    command = UpdateCartQuantity(cart_id=str(cart.id), product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(customer_id, message="Cart updated successfully")


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, customer_id: str = Depends(current_customer_id)) -> CartResponse:
    cart = get_or_create_cart(customer_id)
    current_domain.process(RemoveFromCart(cart_id=str(cart.id), product_id=product_id), asynchronous=False)
    return _cart_response(customer_id, message="Item removed from cart")


@cart_router.post("/validate", response_model=StockValidationResponse)
async def validate_cart(customer_id: str = Depends(current_customer_id)) -> StockValidationResponse:
    cart = current_domain.repository_for(ShoppingCart).find_for_customer(customer_id)
    if cart is None or cart.is_empty:
        raise EmptyCart()

    validation = validate_cart_stock(cart)
    return StockValidationResponse(
        is_valid=validation.is_valid,
        unavailable_items=[
            UnavailableItemSchema.model_validate(item.to_dict()) for item in validation.unavailable_items
        ],
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    customer_id: str = Depends(current_customer_id),
    status: list[str] | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1),
) -> OrderListResponse:
    repo = current_domain.repository_for(Order)
    statuses = [value for raw in status or [] for value in raw.split(",") if value]
    result = repo.page_for_customer(customer_id, statuses=statuses, page=page, limit=limit)
    stats = order_stats(repo.all_for_customer(customer_id))

    return OrderListResponse(
        orders=[OrderSchema.from_order(order) for order in result.orders],
        stats=OrderStatsSchema(**stats),
        pagination=PaginationSchema(
            current_page=result.page,
            total_pages=result.total_pages,
            total_items=result.total,
            limit=result.limit,
            has_next_page=result.has_next,
            has_prev_page=result.has_prev,
        ),
    )


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, customer_id: str = Depends(current_customer_id)) -> OrderResponse:
    address = body.shipping_address
    command = PlaceOrder(
        customer_id=customer_id,
        phone=address.phone if address else None,
        street=address.street if address else None,
        city=address.city if address else None,
        state=address.state if address else None,
        customer_notes=body.customer_notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse(message="Order placed successfully", order=OrderSchema.from_order(order))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, customer_id: str = Depends(current_customer_id)) -> OrderResponse:
    order = current_domain.repository_for(Order).get_for_customer(customer_id, order_id)
    return OrderResponse(order=OrderSchema.from_order(order))


@order_router.patch("/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    customer_id: str = Depends(current_customer_id),
) -> OrderStatusResponse:
    if not body.status:
        raise InvalidRequest("Status is required")

    command = UpdateOrderStatus(
        order_id=order_id,
        customer_id=customer_id,
        status=body.status,
        note=body.note,
        actor=Actor.CUSTOMER.value,
    )
    current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderStatusResponse(
        message="Order status updated successfully",
        order=OrderSummarySchema.from_order(order),
    )
