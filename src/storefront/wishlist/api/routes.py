"""FastAPI endpoints for the customer's wishlist and shared wishlists."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.errors import InvalidRequest, NotFound
from storefront.web.session import current_customer_id
from storefront.wishlist.api.schemas import (
    AddToWishlistRequest,
    NotificationSettings,
    SharedWishlistResponse,
    SharedWishlistSchema,
    UpdateWishlistItemRequest,
    UpdateWishlistRequest,
    WishlistResponse,
    WishlistSchema,
)
from storefront.wishlist.management import (
    AddToWishlist,
    RemoveFromWishlist,
    UpdateWishlist,
    UpdateWishlistItem,
    get_or_create_wishlist,
)
from storefront.wishlist.wishlist import Wishlist

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def _existing_wishlist(customer_id: str) -> Wishlist:
    wishlist = current_domain.repository_for(Wishlist).find_for_customer(customer_id)
    if wishlist is None:
        raise NotFound("Wishlist not found")
    return wishlist


def _wishlist_response(customer_id: str, message: str | None = None) -> WishlistResponse:
    wishlist = current_domain.repository_for(Wishlist).find_for_customer(customer_id)
    return WishlistResponse(message=message, wishlist=WishlistSchema.from_wishlist(wishlist))


def _notification_fields(settings: NotificationSettings | None) -> dict:
    if settings is None:
        return {}
    return settings.model_dump(exclude_none=True)


@router.get("", response_model=WishlistResponse)
async def get_wishlist(customer_id: str = Depends(current_customer_id)) -> WishlistResponse:
    wishlist = get_or_create_wishlist(customer_id)
    return WishlistResponse(wishlist=WishlistSchema.from_wishlist(wishlist))


@router.post("", response_model=WishlistResponse)
async def add_to_wishlist(
    body: AddToWishlistRequest,
    customer_id: str = Depends(current_customer_id),
) -> WishlistResponse:
    if not body.product_id:
        raise InvalidRequest("Product ID is required")

    wishlist = get_or_create_wishlist(customer_id)
    command = AddToWishlist(
        wishlist_id=str(wishlist.id),
        product_id=body.product_id,
        priority=body.priority,
        notes=body.notes,
        **_notification_fields(body.notifications),
    )
    current_domain.process(command, asynchronous=False)
    return _wishlist_response(customer_id, message="Item added to wishlist")


@router.put("", response_model=WishlistResponse)
async def update_wishlist(
    body: UpdateWishlistRequest,
    customer_id: str = Depends(current_customer_id),
) -> WishlistResponse:
    wishlist = _existing_wishlist(customer_id)
    command = UpdateWishlist(
        wishlist_id=str(wishlist.id),
        name=body.name,
        description=body.description,
        is_public=body.is_public,
    )
    current_domain.process(command, asynchronous=False)
    return _wishlist_response(customer_id, message="Wishlist updated successfully")


@router.get("/shared/{share_code}", response_model=SharedWishlistResponse)
async def get_shared_wishlist(share_code: str) -> SharedWishlistResponse:
    repo = current_domain.repository_for(Wishlist)
    wishlist = repo.find_shared(share_code)
    if wishlist is None:
        raise NotFound("Wishlist not found")

    wishlist.record_view()
    repo.add(wishlist)
    return SharedWishlistResponse(wishlist=SharedWishlistSchema.from_wishlist(wishlist))


@router.put("/{product_id}", response_model=WishlistResponse)
async def update_wishlist_item(
    product_id: str,
    body: UpdateWishlistItemRequest,
    customer_id: str = Depends(current_customer_id),
) -> WishlistResponse:
    wishlist = _existing_wishlist(customer_id)
    command = UpdateWishlistItem(
        wishlist_id=str(wishlist.id),
        product_id=product_id,
        priority=body.priority,
        notes=body.notes,
        update_notes="notes" in body.model_fields_set,
        **_notification_fields(body.notifications),
    )
    current_domain.process(command, asynchronous=False)
    return _wishlist_response(customer_id, message="Wishlist item updated")


@router.delete("/{product_id}", response_model=WishlistResponse)
async def remove_from_wishlist(product_id: str, customer_id: str = Depends(current_customer_id)) -> WishlistResponse:
    wishlist = _existing_wishlist(customer_id)
    current_domain.process(RemoveFromWishlist(wishlist_id=str(wishlist.id), product_id=product_id), asynchronous=False)
    return _wishlist_response(customer_id, message="Item removed from wishlist")
