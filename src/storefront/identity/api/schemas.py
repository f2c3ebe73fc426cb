"""Pydantic request/response schemas for the authentication API."""

from datetime import datetime

from storefront.web.envelope import CamelModel, Envelope

# --- Request Schemas ---
# Required fields are checked by the routes so a missing field gets the
# same 400 envelope as any other invalid input.


class RegisterRequest(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str | None = None
    phone: str | None = None
    agree_to_terms: bool = False


class VerifyEmailRequest(CamelModel):
    email: str | None = None
    code: str | None = None


class ResendVerificationRequest(CamelModel):
    email: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


# --- Response Schemas ---


class RegisteredCustomer(CamelModel):
    email: str


class CustomerProfile(CamelModel):
    """What a customer may see about their own account."""

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone: str | None = None
    is_verified: bool
    last_login_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_customer(cls, customer) -> "CustomerProfile":
        return cls(
            id=str(customer.id),
            email=customer.email,
            first_name=customer.first_name,
            last_name=customer.last_name,
            full_name=customer.full_name,
            phone=customer.phone,
            is_verified=bool(customer.is_verified),
            last_login_at=customer.last_login_at,
            created_at=customer.created_at,
        )


class RegisterResponse(Envelope):
    customer: RegisteredCustomer


class CustomerResponse(Envelope):
    customer: CustomerProfile
