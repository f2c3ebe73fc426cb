"""Domain events for the CustomerSession aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="CustomerSession")
class SessionStarted:
    """A customer signed in on a device. The token is never part of the event."""

    __version__ = 1

    session_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    ip_address: String()
    user_agent: String()
    expires_at: DateTime(required=True)
