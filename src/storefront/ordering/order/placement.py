"""Checkout: turn the customer's cart into a pending order."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.catalogue.store.store import Store
from storefront.domain import storefront
from storefront.errors import EmptyCart, InvalidRequest, NotFound, StockValidationFailed
from storefront.identity.customer.customer import Customer
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.stock import validate_cart_stock
from storefront.ordering.order.order import Order, ShippingAddress
from storefront.shared.phone import normalize_phone
from storefront.shared.snapshots import CustomerSnapshot

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    phone = String(max_length=30)
    street = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    customer_notes = Text()


def _shipping_phone(raw: str | None) -> str:
    try:
        return normalize_phone(raw)
    except ValidationError:
        raise InvalidRequest("Invalid phone number format", reason="invalid_phone") from None


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        """Create the order, take the stock and empty the cart. Returns the order id."""
        try:
            customer = current_domain.repository_for(Customer).get(command.customer_id)
        except ObjectNotFoundError:
            raise NotFound("Customer not found") from None

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_for_customer(str(customer.id))
        if cart is None or cart.is_empty:
            raise EmptyCart()

        validation = validate_cart_stock(cart)
        if not validation.is_valid:
            raise StockValidationFailed(
                unavailable_items=[item.to_dict() for item in validation.unavailable_items],
            )

        if not (command.phone and command.city and command.state):
            raise InvalidRequest("Complete shipping address is required", reason="incomplete_address")
        phone = _shipping_phone(command.phone)

        store_repo = current_domain.repository_for(Store)
        stores = {store_id: store_repo.get(store_id) for store_id in cart.items_by_store()}

        lines = [
            {
                "product_id": item.product_id,
                "store_id": item.store_id,
                "seller_id": stores[str(item.store_id)].owner_id,
                "product_snapshot": item.product_snapshot,
                "store_snapshot": stores[str(item.store_id)].snapshot(),
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in cart.items
        ]
        order = Order.place(
            customer_id=str(customer.id),
            customer_snapshot=CustomerSnapshot(
                first_name=customer.first_name,
                last_name=customer.last_name,
                email=customer.email,
                phone=phone,
            ),
            lines=lines,
            shipping_address=ShippingAddress(
                first_name=customer.first_name,
                last_name=customer.last_name,
                phone=phone,
                street=command.street or f"{command.city}, {command.state}",
                city=command.city,
                state=command.state,
            ),
            customer_notes=command.customer_notes,
        )
        current_domain.repository_for(Order).add(order)

        product_repo = current_domain.repository_for(Product)
        for item in cart.items:
            product = product_repo.get(str(item.product_id))
            product.record_sale(item.quantity)
            product_repo.add(product)

        for store_id, items in order.items_by_store().items():
            store = stores[store_id]
            store.record_sale(sum(item.subtotal for item in items))
            store_repo.add(store)

        customer.record_order(order.total_amount)
        current_domain.repository_for(Customer).add(customer)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(customer.id),
            total_amount=order.total_amount,
        )
        return str(order.id)
