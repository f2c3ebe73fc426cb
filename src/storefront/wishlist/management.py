"""Wishlist commands and handlers."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.catalogue.store.store import Store
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.identity.customer.customer import Customer
from storefront.shared.creation import get_or_create
from storefront.shared.snapshots import CustomerSnapshot
from storefront.wishlist.wishlist import UNSET, Priority, Wishlist, WishlistProductSnapshot


def product_snapshot(product: Product) -> WishlistProductSnapshot:
    """Everything a shopper sees about a product, minus the seller's cost price."""
    return WishlistProductSnapshot(
        product_name=product.product_name,
        sku=product.sku,
        image=product.image,
        category=product.category,
        brand=product.brand,
        description=product.description,
        unit_of_measure=product.unit_of_measure,
        selling_price=product.selling_price,
        quantity_in_stock=product.quantity_in_stock,
        status=product.status,
        web_visibility=product.web_visibility,
    )


def _customer_snapshot(customer_id: str) -> CustomerSnapshot | None:
    try:
        customer = current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError:
        return None
    return CustomerSnapshot(
        first_name=customer.first_name,
        last_name=customer.last_name,
        email=customer.email,
        phone=customer.phone,
    )


def get_or_create_wishlist(customer_id: str) -> Wishlist:
    """The customer's wishlist, created empty on first use."""
    repo = current_domain.repository_for(Wishlist)
    return get_or_create(
        repo,
        find=lambda: repo.find_for_customer(customer_id),
        build=lambda: Wishlist.create(customer_id, customer_snapshot=_customer_snapshot(customer_id)),
        unique_field="customer_id",
    )


def _notifications(command) -> dict:
    settings = {
        "price_drop_alert": command.price_drop_alert,
        "back_in_stock_alert": command.back_in_stock_alert,
    }
    if command.target_price is not None:
        settings["target_price"] = command.target_price
    return settings


@storefront.command(part_of="Wishlist")
class AddToWishlist:
    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)
    priority = String(choices=Priority, default=Priority.MEDIUM.value)
    notes = String(max_length=500)
    price_drop_alert = Boolean()
    back_in_stock_alert = Boolean()
    target_price = Float(min_value=0.0)


@storefront.command(part_of="Wishlist")
class UpdateWishlistItem:
    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)
    priority = String(choices=Priority)
    notes = String(max_length=500)
    update_notes = Boolean(default=False)
    price_drop_alert = Boolean()
    back_in_stock_alert = Boolean()
    target_price = Float(min_value=0.0)


@storefront.command(part_of="Wishlist")
class RemoveFromWishlist:
    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Wishlist")
class UpdateWishlist:
    wishlist_id = Identifier(required=True)
    name = String(max_length=100)
    description = String(max_length=500)
    is_public = Boolean()


@storefront.command_handler(part_of=Wishlist)
class WishlistCommandHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        wishlist = repo.get(command.wishlist_id)

        try:
            product = current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found") from None
        try:
            store = current_domain.repository_for(Store).get(product.store_id)
        except ObjectNotFoundError:
            raise NotFound("Store not found") from None

        wishlist.add_item(
            product_id=product.id,
            store_id=store.id,
            store_owner_id=store.owner_id,
            product_snapshot=product_snapshot(product),
            store_snapshot=store.snapshot(),
            priority=command.priority,
            notes=command.notes,
            notifications=_notifications(command),
        )
        repo.add(wishlist)

    @handle(UpdateWishlistItem)
    def update_wishlist_item(self, command):
        repo = current_domain.repository_for(Wishlist)
        wishlist = repo.get(command.wishlist_id)
        if wishlist.find_item(command.product_id) is None:
            raise NotFound("Item not found in wishlist")

        if command.priority:
            wishlist.update_item_priority(command.product_id, command.priority)
        if command.update_notes:
            wishlist.update_item_notes(command.product_id, command.notes)
        wishlist.update_notification_settings(command.product_id, _notifications(command))
        repo.add(wishlist)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        wishlist = repo.get(command.wishlist_id)
        if wishlist.remove_item(command.product_id):
            repo.add(wishlist)

    @handle(UpdateWishlist)
    def update_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        wishlist = repo.get(command.wishlist_id)

        wishlist.update_details(
            name=command.name if command.name is not None else UNSET,
            description=command.description if command.description is not None else UNSET,
        )
        if command.is_public is not None:
            wishlist.set_visibility(command.is_public)
        repo.add(wishlist)
