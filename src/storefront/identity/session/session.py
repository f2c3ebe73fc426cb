"""CustomerSession aggregate: server-side record behind the session cookie."""

import secrets
from datetime import datetime

from protean.fields import DateTime, Identifier, Integer, String

from storefront import config
from storefront.domain import storefront
from storefront.identity.session.events import SessionStarted
from storefront.shared.clock import as_utc, utcnow
from storefront.shared.queries import fetch_all

# 32 random bytes, urlsafe base64 encoded
TOKEN_BYTES = 32


@storefront.aggregate
class CustomerSession:
    token: String(required=True, max_length=128, unique=True)
    customer_id: Identifier(required=True)
    expires_at: DateTime(required=True)
    ip_address: String(max_length=100)
    user_agent: String(max_length=500)
    last_activity_at: DateTime()
    page_views: Integer(default=0, min_value=0)
    created_at: DateTime(default=utcnow)

    @classmethod
    def start(cls, customer_id, ip_address=None, user_agent=None, now=None):
        now = now or utcnow()
        session = cls(
            token=secrets.token_urlsafe(TOKEN_BYTES),
            customer_id=customer_id,
            expires_at=now + config.session_ttl(),
            ip_address=(ip_address or "unknown")[:100],
            user_agent=(user_agent or "unknown")[:500],
            last_activity_at=now,
            created_at=now,
        )
        session.raise_(
            SessionStarted(
                session_id=str(session.id),
                customer_id=str(customer_id),
                ip_address=session.ip_address,
                user_agent=session.user_agent,
                expires_at=session.expires_at,
            )
        )
        return session

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or utcnow()
        return not now < as_utc(self.expires_at)

    def touch(self, now: datetime | None = None) -> None:
        self.last_activity_at = now or utcnow()
        self.page_views = (self.page_views or 0) + 1


@storefront.repository(part_of=CustomerSession)
class CustomerSessionRepository:
    def find_by_token(self, token: str) -> CustomerSession | None:
        results = self._dao.query.filter(token=token).all().items
        return results[0] if results else None

    def for_customer(self, customer_id: str) -> list[CustomerSession]:
        return fetch_all(self._dao.query.filter(customer_id=customer_id))

    def expired(self, now: datetime) -> list[CustomerSession]:
        return fetch_all(self._dao.query.filter(expires_at__lte=now))

    def remove(self, session: CustomerSession) -> None:
        self._dao.delete(session)
