"""Pydantic request/response schemas for the cart and order APIs."""

from datetime import datetime

from pydantic import Field

from storefront.web.envelope import CamelModel, Envelope

# --- Request Schemas ---


class AddToCartRequest(CamelModel):
    product_id: str | None = None
    quantity: int = 1
    notes: str | None = Field(None, max_length=200)


class UpdateCartItemRequest(CamelModel):
    quantity: int


class ShippingAddressRequest(CamelModel):
    phone: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None


class PlaceOrderRequest(CamelModel):
    shipping_address: ShippingAddressRequest | None = None
    customer_notes: str | None = Field(None, max_length=1000)


class UpdateOrderStatusRequest(CamelModel):
    status: str | None = None
    note: str | None = Field(None, max_length=500)


# --- Shared pieces ---


class ProductSnapshotSchema(CamelModel):
    product_name: str
    sku: str | None = None
    category: str | None = None
    image: str | None = None
    unit_of_measure: str | None = None


class StoreSnapshotSchema(CamelModel):
    store_name: str
    store_slug: str | None = None
    store_phone: str | None = None
    store_email: str | None = None
    logo: str | None = None
    primary_color: str | None = None


def _snapshot(schema, value):
    return schema.model_validate(value.to_dict()) if value else None


# --- Cart ---


class CartItemSchema(CamelModel):
    id: str
    product_id: str
    store_id: str
    quantity: int
    price: float
    subtotal: float
    notes: str | None = None
    added_at: datetime | None = None
    product_snapshot: ProductSnapshotSchema | None = None
    store_snapshot: StoreSnapshotSchema | None = None

    @classmethod
    def from_item(cls, item) -> "CartItemSchema":
        return cls(
            id=str(item.id),
            product_id=str(item.product_id),
            store_id=str(item.store_id),
            quantity=item.quantity,
            price=item.price,
            subtotal=item.subtotal,
            notes=item.notes,
            added_at=item.added_at,
            product_snapshot=_snapshot(ProductSnapshotSchema, item.product_snapshot),
            store_snapshot=_snapshot(StoreSnapshotSchema, item.store_snapshot),
        )


class StoreGroupSchema(CamelModel):
    store_id: str
    store_name: str | None = None
    store_slug: str | None = None
    item_count: int
    subtotal: float
    items: list[CartItemSchema]


def _store_groups(groups: dict) -> list[StoreGroupSchema]:
    result = []
    for store_id, items in groups.items():
        snapshot = items[0].store_snapshot
        result.append(
            StoreGroupSchema(
                store_id=store_id,
                store_name=snapshot.store_name if snapshot else None,
                store_slug=snapshot.store_slug if snapshot else None,
                item_count=sum(item.quantity for item in items),
                subtotal=round(sum(item.subtotal for item in items), 2),
                items=[CartItemSchema.from_item(item) for item in items],
            )
        )
    return result


class CartSchema(CamelModel):
    id: str
    customer_id: str
    items: list[CartItemSchema]
    stores: list[StoreGroupSchema]
    subtotal: float
    item_count: int
    store_count: int
    is_empty: bool
    updated_at: datetime | None = None

    @classmethod
    def from_cart(cls, cart) -> "CartSchema":
        return cls(
            id=str(cart.id),
            customer_id=str(cart.customer_id),
            items=[CartItemSchema.from_item(item) for item in cart.items],
            stores=_store_groups(cart.items_by_store()),
            subtotal=cart.subtotal,
            item_count=cart.item_count,
            store_count=cart.store_count,
            is_empty=cart.is_empty,
            updated_at=cart.updated_at,
        )


class CartResponse(Envelope):
    cart: CartSchema


class UnavailableItemSchema(CamelModel):
    product_id: str
    product_name: str | None = None
    requested_quantity: int
    reason: str
    available_quantity: int | None = None


class StockValidationResponse(Envelope):
    is_valid: bool
    unavailable_items: list[UnavailableItemSchema]


# --- Orders ---


class OrderItemSchema(CamelModel):
    id: str
    product_id: str
    store_id: str
    seller_id: str | None = None
    quantity: int
    price: float
    subtotal: float
    item_status: str
    product_snapshot: ProductSnapshotSchema | None = None
    store_snapshot: StoreSnapshotSchema | None = None

    @classmethod
    def from_item(cls, item) -> "OrderItemSchema":
        return cls(
            id=str(item.id),
            product_id=str(item.product_id),
            store_id=str(item.store_id),
            seller_id=str(item.seller_id) if item.seller_id else None,
            quantity=item.quantity,
            price=item.price,
            subtotal=item.subtotal,
            item_status=item.item_status,
            product_snapshot=_snapshot(ProductSnapshotSchema, item.product_snapshot),
            store_snapshot=_snapshot(StoreSnapshotSchema, item.store_snapshot),
        )


class StatusChangeSchema(CamelModel):
    status: str
    note: str | None = None
    actor: str
    changed_at: datetime


class ShippingAddressSchema(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    phone: str
    street: str | None = None
    city: str
    state: str
    country: str | None = None


class OrderSummarySchema(CamelModel):
    id: str
    order_number: str
    status: str
    item_count: int
    store_count: int
    total_amount: float
    payment_status: str
    created_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderSummarySchema":
        return cls(
            id=str(order.id),
            order_number=order.order_number,
            status=order.status,
            item_count=order.item_count,
            store_count=len(order.items_by_store()),
            total_amount=order.total_amount,
            payment_status=order.payment_status,
            created_at=order.created_at,
        )


class OrderSchema(OrderSummarySchema):
    items: list[OrderItemSchema]
    history: list[StatusChangeSchema]
    allowed_transitions: list[str]
    subtotal: float
    tax: float
    shipping_fee: float
    discount: float
    shipping_address: ShippingAddressSchema | None = None
    customer_notes: str | None = None
    payment_method: str
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderSchema":
        history = sorted(order.history, key=lambda change: change.changed_at)
        return cls(
            **OrderSummarySchema.from_order(order).model_dump(),
            items=[OrderItemSchema.from_item(item) for item in order.items],
            history=[
                StatusChangeSchema(
                    status=change.status,
                    note=change.note,
                    actor=change.actor,
                    changed_at=change.changed_at,
                )
                for change in history
            ],
            allowed_transitions=order.allowed_transitions(),
            subtotal=order.subtotal,
            tax=order.tax,
            shipping_fee=order.shipping_fee,
            discount=order.discount,
            shipping_address=_snapshot(ShippingAddressSchema, order.shipping_address),
            customer_notes=order.customer_notes,
            payment_method=order.payment_method,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
        )


class OrderStatsSchema(CamelModel):
    total_orders: int
    total_spent: float
    by_status: dict[str, int]
    pending_orders: int
    completed_orders: int
    cancelled_orders: int


class PaginationSchema(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class OrderListResponse(Envelope):
    orders: list[OrderSchema]
    stats: OrderStatsSchema
    pagination: PaginationSchema


class OrderResponse(Envelope):
    order: OrderSchema


class OrderStatusResponse(Envelope):
    order: OrderSummarySchema
