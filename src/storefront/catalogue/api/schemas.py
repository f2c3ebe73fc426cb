"""Pydantic response schemas for public catalogue pages."""

from storefront.web.envelope import CamelModel, Envelope


class StoreSummary(CamelModel):
    id: str
    store_name: str
    store_slug: str
    store_phone: str | None = None
    store_email: str | None = None
    logo: str | None = None
    primary_color: str | None = None
    currency: str

    @classmethod
    def from_store(cls, store) -> "StoreSummary":
        return cls(
            id=str(store.id),
            store_name=store.store_name,
            store_slug=store.store_slug,
            store_phone=store.store_phone,
            store_email=store.store_email,
            logo=store.branding.logo if store.branding else None,
            primary_color=store.branding.primary_color if store.branding else None,
            currency=store.currency,
        )


class AddressSchema(CamelModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None


class BrandingSchema(CamelModel):
    logo: str | None = None
    banner: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None


class SocialSchema(CamelModel):
    website: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    tiktok: str | None = None
    whatsapp: str | None = None


class StoreProfile(StoreSummary):
    store_description: str | None = None
    store_type: str
    address: AddressSchema | None = None
    branding: BrandingSchema | None = None
    social: SocialSchema | None = None

    @classmethod
    def from_store(cls, store) -> "StoreProfile":
        summary = StoreSummary.from_store(store).model_dump()

        def _vo(schema, value):
            return schema.model_validate(value.to_dict()) if value else None

        return cls(
            **summary,
            store_description=store.store_description,
            store_type=store.store_type,
            address=_vo(AddressSchema, store.address),
            branding=_vo(BrandingSchema, store.branding),
            social=_vo(SocialSchema, store.social),
        )


class PublicProduct(CamelModel):
    """A product as shoppers see it: no cost price, no sales figures."""

    id: str
    store_id: str
    product_name: str
    sku: str | None = None
    category: str | None = None
    brand: str | None = None
    description: str | None = None
    image: str | None = None
    unit_of_measure: str | None = None
    selling_price: float
    quantity_in_stock: int
    stock_status: str
    is_available: bool

    @classmethod
    def from_product(cls, product) -> "PublicProduct":
        return cls(
            id=str(product.id),
            store_id=str(product.store_id),
            product_name=product.product_name,
            sku=product.sku,
            category=product.category,
            brand=product.brand,
            description=product.description,
            image=product.image,
            unit_of_measure=product.unit_of_measure,
            selling_price=product.selling_price,
            quantity_in_stock=product.quantity_in_stock,
            stock_status=product.stock_status,
            is_available=product.is_sellable and product.quantity_in_stock > 0,
        )


class ProductResponse(Envelope):
    product: PublicProduct
    store: StoreSummary


class StorePageResponse(Envelope):
    store: StoreProfile
    products: list[PublicProduct]


class StoreProductsResponse(Envelope):
    store: StoreSummary
    products: list[PublicProduct]
    total: int
