"""Stock checks against the live catalogue."""

from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.errors import InsufficientStock, NotFound, ProductUnavailable

NO_LONGER_AVAILABLE = "Product no longer available"
INSUFFICIENT_STOCK = "Insufficient stock"


@dataclass
class UnavailableItem:
    product_id: str
    product_name: str | None
    requested_quantity: int
    reason: str
    available_quantity: int | None = None

    def to_dict(self) -> dict:
        entry = {
            "productId": self.product_id,
            "productName": self.product_name,
            "requestedQuantity": self.requested_quantity,
            "reason": self.reason,
        }
        if self.available_quantity is not None:
            entry["availableQuantity"] = self.available_quantity
        return entry


@dataclass
class StockValidation:
    unavailable_items: list[UnavailableItem] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.unavailable_items


def load_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise NotFound("Product not found") from None


def ensure_can_supply(product: Product, quantity: int) -> None:
    """Raise unless `quantity` units of `product` can be sold right now."""
    if not product.is_sellable:
        raise ProductUnavailable()
    if quantity > product.quantity_in_stock:
        raise InsufficientStock(available_quantity=product.quantity_in_stock)


def validate_cart_stock(cart) -> StockValidation:
    """Check every cart line against current stock without changing anything."""
    repo = current_domain.repository_for(Product)
    result = StockValidation()

    for item in cart.items:
        name = item.product_snapshot.product_name if item.product_snapshot else None
        try:
            product = repo.get(str(item.product_id))
        except ObjectNotFoundError:
            product = None

        if product is None or not product.is_sellable:
            result.unavailable_items.append(
                UnavailableItem(str(item.product_id), name, item.quantity, NO_LONGER_AVAILABLE)
            )
        elif item.quantity > product.quantity_in_stock:
            result.unavailable_items.append(
                UnavailableItem(
                    str(item.product_id),
                    name,
                    item.quantity,
                    INSUFFICIENT_STOCK,
                    available_quantity=product.quantity_in_stock,
                )
            )

    return result
