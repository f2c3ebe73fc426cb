"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.store.store import Store
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.stock import ensure_can_supply, load_product


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    notes = String(max_length=200)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)

        product = load_product(command.product_id)
        existing = cart.find_item(product.id)
        already_in_cart = existing.quantity if existing else 0
        ensure_can_supply(product, already_in_cart + command.quantity)

        store = current_domain.repository_for(Store).get(product.store_id)
        cart.add_item(
            product_id=product.id,
            quantity=command.quantity,
            price=product.selling_price,
            store_id=store.id,
            product_snapshot=product.snapshot(),
            store_snapshot=store.snapshot(),
            notes=command.notes,
        )
        repo.add(cart)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)

        item = cart.find_item(command.product_id)
        if item is None:
            raise NotFound("Item not found in cart")

        if command.quantity > item.quantity:
            ensure_can_supply(load_product(command.product_id), command.quantity)

        cart.update_item_quantity(command.product_id, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        if cart.remove_item(command.product_id):
            repo.add(cart)
