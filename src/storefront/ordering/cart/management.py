"""Cart lifecycle: lazy creation and clearing."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import ShoppingCart
from storefront.shared.creation import get_or_create


def get_or_create_cart(customer_id: str) -> ShoppingCart:
    """The customer's cart, created empty on first use."""
    repo = current_domain.repository_for(ShoppingCart)
    return get_or_create(
        repo,
        find=lambda: repo.find_for_customer(customer_id),
        build=lambda: ShoppingCart.create(customer_id),
        unique_field="customer_id",
    )


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ClearCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)
