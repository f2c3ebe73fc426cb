"""Security audit trail: every identity event lands in the structured log."""

import structlog
from protean import handle

from storefront.domain import storefront
from storefront.identity.customer.customer import Customer
from storefront.identity.customer.events import (
    AccountLocked,
    CustomerLoggedIn,
    CustomerRegistered,
    CustomerVerified,
    LoginFailed,
    VerificationCodeIssued,
)
from storefront.identity.session.events import SessionStarted
from storefront.identity.session.session import CustomerSession

logger = structlog.get_logger("storefront.audit")


@storefront.event_handler(part_of=Customer)
class CustomerAuditHandler:
    @handle(CustomerRegistered)
    def on_registered(self, event: CustomerRegistered) -> None:
        logger.info("Customer registered", customer_id=str(event.customer_id), email=event.email)

    @handle(VerificationCodeIssued)
    def on_code_issued(self, event: VerificationCodeIssued) -> None:
        logger.info(
            "Verification code issued",
            customer_id=str(event.customer_id),
            expires_at=event.expires_at.isoformat(),
        )

    @handle(CustomerVerified)
    def on_verified(self, event: CustomerVerified) -> None:
        logger.info("Customer verified", customer_id=str(event.customer_id))

    @handle(LoginFailed)
    def on_login_failed(self, event: LoginFailed) -> None:
        logger.warning("Failed login", customer_id=str(event.customer_id), attempts=event.attempts)

    @handle(AccountLocked)
    def on_account_locked(self, event: AccountLocked) -> None:
        logger.warning(
            "Account locked",
            customer_id=str(event.customer_id),
            locked_until=event.locked_until.isoformat(),
        )

    @handle(CustomerLoggedIn)
    def on_logged_in(self, event: CustomerLoggedIn) -> None:
        logger.info("Customer logged in", customer_id=str(event.customer_id))


@storefront.event_handler(part_of=CustomerSession)
class SessionAuditHandler:
    @handle(SessionStarted)
    def on_session_started(self, event: SessionStarted) -> None:
        logger.info(
            "Session started",
            customer_id=str(event.customer_id),
            session_id=str(event.session_id),
            ip_address=event.ip_address,
        )
