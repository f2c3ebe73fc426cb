"""Domain events for the Customer aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class CustomerRegistered:
    """A shopper created an account with email and password."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    first_name: String(required=True)
    last_name: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="Customer")
class VerificationCodeIssued:
    """A fresh email verification code was generated.

    The code itself is never part of the event.
    """

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    expires_at: DateTime(required=True)


@storefront.event(part_of="Customer")
class CustomerVerified:
    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    verified_at: DateTime(required=True)


@storefront.event(part_of="Customer")
class LoginFailed:
    """A login attempt with the wrong password."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    attempts: Integer(required=True)
    failed_at: DateTime(required=True)


@storefront.event(part_of="Customer")
class AccountLocked:
    """Too many consecutive failed logins; login is refused until `locked_until`."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    locked_until: DateTime(required=True)


@storefront.event(part_of="Customer")
class CustomerLoggedIn:
    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    logged_in_at: DateTime(required=True)
