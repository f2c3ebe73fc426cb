"""Product aggregate: an inventory item a store sells on the web."""

from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.clock import utcnow
from storefront.shared.queries import fetch_all
from storefront.shared.snapshots import ProductSnapshot


class ProductStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DISCONTINUED = "Discontinued"


class StockStatus(Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


@storefront.aggregate
class Product:
    """Sellable through the storefront only while Active and web-visible.

    `cost_price` belongs to the seller and never leaves the catalogue.
    """

    store_id: Identifier(required=True)
    owner_id: Identifier(required=True)
    product_name: String(required=True, max_length=200)
    sku: String(max_length=100)
    category: String(max_length=100)
    brand: String(max_length=100)
    description: Text()
    image: String(max_length=500)
    unit_of_measure: String(max_length=50, default="Pieces")
    cost_price: Float(min_value=0.0, default=0.0)
    selling_price: Float(required=True, min_value=0.0)
    quantity_in_stock: Integer(default=0, min_value=0)
    reorder_level: Integer(default=0, min_value=0)
    sold_quantity: Integer(default=0, min_value=0)
    status: String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    web_visibility: Boolean(default=False)
    updated_at: DateTime(default=utcnow)

    @property
    def is_sellable(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value and bool(self.web_visibility)

    @property
    def stock_status(self) -> str:
        if self.quantity_in_stock <= 0:
            return StockStatus.OUT_OF_STOCK.value
        if self.quantity_in_stock <= (self.reorder_level or 0):
            return StockStatus.LOW_STOCK.value
        return StockStatus.IN_STOCK.value

    def snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(
            product_name=self.product_name,
            sku=self.sku,
            category=self.category,
            image=self.image,
            unit_of_measure=self.unit_of_measure,
        )

    def record_sale(self, quantity: int, now: datetime | None = None) -> None:
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if quantity > self.quantity_in_stock:
            raise ValidationError({"quantity_in_stock": [f"Only {self.quantity_in_stock} items available in stock"]})

        self.quantity_in_stock -= quantity
        self.sold_quantity = (self.sold_quantity or 0) + quantity
        self.updated_at = now or utcnow()


@storefront.repository(part_of=Product)
class ProductRepository:
    def listed_for_store(self, store_id: str) -> list[Product]:
        """Active, web-visible products of a store, by name."""
        query = self._dao.query.filter(
            store_id=store_id,
            status=ProductStatus.ACTIVE.value,
            web_visibility=True,
        ).order_by("product_name")
        return fetch_all(query)
