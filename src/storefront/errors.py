"""Typed storefront errors.

Every error carries an explicit kind that the HTTP layer maps to a status
code, so nothing downstream has to inspect message text.
"""

from enum import Enum
from typing import Any

from pydantic.alias_generators import to_camel


class ErrorKind(Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    UNEXPECTED = "unexpected"


HTTP_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.BUSINESS_RULE: 400,
    ErrorKind.UNEXPECTED: 500,
}


class StorefrontError(Exception):
    """Base class for errors that surface to storefront clients."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message = "Something went wrong"
    reason: str | None = None

    def __init__(self, message: str | None = None, *, reason: str | None = None, **payload: Any):
        self.message = message or self.default_message
        if reason is not None:
            self.reason = reason
        self.payload = payload
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "message": self.message}
        if self.reason:
            body["reason"] = self.reason
        for key, value in self.payload.items():
            if value is not None:
                body[to_camel(key)] = value
        return body


class InvalidRequest(StorefrontError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid request"


class NotAuthenticated(StorefrontError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Not authenticated"


class InvalidCredentials(StorefrontError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Invalid email or password"


class AccountLocked(StorefrontError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Account is temporarily locked due to too many failed login attempts. Please try again later."
    reason = "account_locked"


class EmailNotVerified(StorefrontError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Please verify your email before logging in"
    reason = "email_not_verified"

    def __init__(self, message: str | None = None, **payload: Any):
        payload.setdefault("requires_verification", True)
        super().__init__(message, **payload)


class NotFound(StorefrontError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class AlreadyExists(StorefrontError):
    kind = ErrorKind.CONFLICT
    default_message = "Already exists"


class InvalidVerificationCode(StorefrontError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid or expired verification code"
    reason = "invalid_verification_code"


class ProductUnavailable(StorefrontError):
    kind = ErrorKind.BUSINESS_RULE
    default_message = "Product is not available"
    reason = "product_unavailable"


class InsufficientStock(StorefrontError):
    kind = ErrorKind.BUSINESS_RULE
    reason = "insufficient_stock"

    def __init__(self, available_quantity: int, message: str | None = None):
        super().__init__(
            message or f"Only {available_quantity} items available in stock",
            available_quantity=available_quantity,
        )
        self.available_quantity = available_quantity


class InvalidStatusTransition(StorefrontError):
    kind = ErrorKind.BUSINESS_RULE
    reason = "invalid_status_transition"


class StatusChangeNotPermitted(StorefrontError):
    kind = ErrorKind.FORBIDDEN
    reason = "status_change_not_permitted"


class EmptyCart(StorefrontError):
    kind = ErrorKind.BUSINESS_RULE
    default_message = "Cart is empty"
    reason = "empty_cart"


class StockValidationFailed(StorefrontError):
    kind = ErrorKind.BUSINESS_RULE
    default_message = "Some items in your cart are no longer available"
    reason = "stock_validation_failed"
