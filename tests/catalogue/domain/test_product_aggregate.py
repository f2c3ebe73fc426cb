import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.product.product import Product, ProductStatus, StockStatus


def _product(**overrides):
    fields = {
        "store_id": "store-1",
        "owner_id": "owner-1",
        "product_name": "Garri 2kg",
        "selling_price": 2000.0,
        "quantity_in_stock": 10,
        "reorder_level": 3,
        "web_visibility": True,
    }
    fields.update(overrides)
    return Product(**fields)


class TestSellable:
    def test_active_and_visible(self):
        assert _product().is_sellable is True

    def test_hidden_from_web(self):
        assert _product(web_visibility=False).is_sellable is False

    @pytest.mark.parametrize("status", [ProductStatus.INACTIVE.value, ProductStatus.DISCONTINUED.value])
    def test_not_active(self, status):
        assert _product(status=status).is_sellable is False

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(status="Archived")


class TestStockStatus:
    def test_in_stock(self):
        assert _product(quantity_in_stock=10).stock_status == StockStatus.IN_STOCK.value

    def test_low_stock_at_reorder_level(self):
        assert _product(quantity_in_stock=3).stock_status == StockStatus.LOW_STOCK.value

    def test_out_of_stock(self):
        assert _product(quantity_in_stock=0).stock_status == StockStatus.OUT_OF_STOCK.value


class TestStockMovements:
    def test_record_sale_takes_stock(self):
        product = _product()
        product.record_sale(4)
        assert product.quantity_in_stock == 6
        assert product.sold_quantity == 4

    def test_cannot_sell_more_than_stock(self):
        product = _product(quantity_in_stock=2)
        with pytest.raises(ValidationError) as exc:
            product.record_sale(3)
        assert exc.value.messages["quantity_in_stock"] == ["Only 2 items available in stock"]
        assert product.quantity_in_stock == 2

    def test_sale_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            _product().record_sale(0)

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(quantity_in_stock=-1)


def test_snapshot_has_no_prices():
    snapshot = _product(sku="GAR-2", cost_price=1200.0).snapshot().to_dict()
    assert snapshot["product_name"] == "Garri 2kg"
    assert snapshot["sku"] == "GAR-2"
    assert "cost_price" not in snapshot
    assert "selling_price" not in snapshot
