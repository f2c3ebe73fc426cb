"""Store aggregate: a seller's public storefront."""

import re
from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.shared.clock import utcnow
from storefront.shared.snapshots import StoreSnapshot

DEFAULT_PRIMARY_COLOR = "#0D9488"
DEFAULT_SECONDARY_COLOR = "#F3F4F6"
SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]{1,28}[a-z0-9]$")


class StoreType(Enum):
    PHYSICAL = "physical"
    ONLINE = "online"


class Currency(Enum):
    NGN = "NGN"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


@storefront.value_object(part_of="Store")
class StoreAddress:
    street: String(max_length=200)
    city: String(max_length=100)
    state: String(max_length=100)
    country: String(max_length=100, default="Nigeria")
    postal_code: String(max_length=20)


@storefront.value_object(part_of="Store")
class Branding:
    logo: String(max_length=500)
    banner: String(max_length=500)
    primary_color: String(max_length=20, default=DEFAULT_PRIMARY_COLOR)
    secondary_color: String(max_length=20, default=DEFAULT_SECONDARY_COLOR)


@storefront.value_object(part_of="Store")
class SocialLinks:
    website: String(max_length=300)
    instagram: String(max_length=300)
    facebook: String(max_length=300)
    twitter: String(max_length=300)
    tiktok: String(max_length=300)
    whatsapp: String(max_length=30)


@storefront.aggregate
class Store:
    """A seller's store. Reachable publicly at `/stores/<store_slug>` once
    both the store and its website are switched on.
    """

    owner_id: Identifier(required=True)
    store_name: String(required=True, max_length=100)
    store_slug: String(required=True, max_length=30, unique=True)
    store_description: String(max_length=500, default="")
    store_type: String(choices=StoreType, default=StoreType.PHYSICAL.value)
    store_phone: String(max_length=20)
    store_email: String(max_length=100)
    address: ValueObject(StoreAddress)
    branding: ValueObject(Branding)
    social: ValueObject(SocialLinks)
    currency: String(choices=Currency, default=Currency.NGN.value)
    is_active: Boolean(default=True)
    website_enabled: Boolean(default=False)
    page_views: Integer(default=0, min_value=0)
    total_sales: Integer(default=0, min_value=0)
    total_revenue: Float(default=0.0, min_value=0.0)
    last_sale_at: DateTime()
    created_at: DateTime(default=utcnow)

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.store_slug and not SLUG_PATTERN.match(self.store_slug):
            raise ValidationError(
                {"store_slug": ["Website path must be 3-30 characters, lowercase letters, digits and hyphens"]}
            )

    @property
    def is_public(self) -> bool:
        return bool(self.is_active and self.website_enabled)

    def snapshot(self) -> StoreSnapshot:
        """Freeze the details a shopper needs to recognize and contact the store."""
        return StoreSnapshot(
            store_name=self.store_name,
            store_slug=self.store_slug,
            store_phone=self.store_phone,
            store_email=self.store_email,
            logo=self.branding.logo if self.branding else None,
            primary_color=self.branding.primary_color if self.branding else DEFAULT_PRIMARY_COLOR,
        )

    def record_page_view(self) -> None:
        self.page_views = (self.page_views or 0) + 1

    def record_sale(self, amount: float, now: datetime | None = None) -> None:
        self.total_sales = (self.total_sales or 0) + 1
        self.total_revenue = round((self.total_revenue or 0.0) + amount, 2)
        self.last_sale_at = now or utcnow()


@storefront.repository(part_of=Store)
class StoreRepository:
    def find_by_slug(self, slug: str) -> Store | None:
        results = self._dao.query.filter(store_slug=slug.strip().lower()).all().items
        return results[0] if results else None
