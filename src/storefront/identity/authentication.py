"""Password login and session lifecycle.

These run as plain services rather than command handlers: a failed login
must still persist the attempt counter, which a handler's unit of work
would roll back along with the rejected request.
"""

from datetime import datetime

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.errors import AccountLocked, EmailNotVerified, InvalidCredentials
from storefront.identity.customer.customer import Customer
from storefront.identity.customer.passwords import burn_password_check, verify_password
from storefront.identity.session.session import CustomerSession
from storefront.shared.clock import utcnow
from storefront.shared.email import normalize_email

logger = structlog.get_logger(__name__)


def authenticate(email: str, password: str) -> Customer:
    """Check credentials and return the customer allowed to sign in.

    Unknown emails and wrong passwords are indistinguishable to the caller.
    The password is checked before the lock and verification state, so
    those are only disclosed to someone who knows the password.
    """
    try:
        email = normalize_email(email)
    except ValidationError:
        burn_password_check(password)
        raise InvalidCredentials() from None

    repo = current_domain.repository_for(Customer)
    customer = repo.find_by_email(email)
    if customer is None:
        burn_password_check(password)
        logger.info("Login rejected", reason="unknown_email")
        raise InvalidCredentials()

    if not verify_password(password, customer.password_hash):
        locked = customer.record_failed_login()
        repo.add(customer)
        logger.warning(
            "Login rejected",
            reason="wrong_password",
            customer_id=str(customer.id),
            attempts=customer.login_attempts,
            locked=locked,
        )
        raise InvalidCredentials()

    if customer.is_locked():
        logger.warning("Login rejected", reason="account_locked", customer_id=str(customer.id))
        raise AccountLocked()

    if not customer.is_verified:
        raise EmailNotVerified(email=customer.email)

    customer.record_login()
    repo.add(customer)
    return customer


def issue_session(customer_id: str, ip_address: str | None = None, user_agent: str | None = None) -> CustomerSession:
    session = CustomerSession.start(customer_id, ip_address=ip_address, user_agent=user_agent)
    current_domain.repository_for(CustomerSession).add(session)
    return session


def login(
    email: str,
    password: str,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> tuple[Customer, CustomerSession]:
    customer = authenticate(email, password)
    session = issue_session(str(customer.id), ip_address=ip_address, user_agent=user_agent)
    return customer, session


def resolve_session(token: str | None) -> str | None:
    """Return the customer id behind a session token, if it is still valid.

    Sessions of a deleted or deactivated customer no longer resolve.
    Recording the activity is best effort and never fails the request.
    """
    if not token:
        return None

    repo = current_domain.repository_for(CustomerSession)
    session = repo.find_by_token(token)
    if session is None or session.is_expired():
        return None

    try:
        customer = current_domain.repository_for(Customer).get(str(session.customer_id))
    except ObjectNotFoundError:
        return None
    if not customer.is_active:
        return None

    try:
        session.touch()
        repo.add(session)
    except Exception as exc:
        logger.warning("Could not record session activity", session_id=str(session.id), error=str(exc))

    return str(session.customer_id)


def revoke_session(token: str | None) -> bool:
    """Delete the session record. Returns False when there was nothing to delete."""
    if not token:
        return False

    repo = current_domain.repository_for(CustomerSession)
    session = repo.find_by_token(token)
    if session is None:
        return False

    repo.remove(session)
    logger.info("Session ended", customer_id=str(session.customer_id), session_id=str(session.id))
    return True


def purge_expired_sessions(now: datetime | None = None) -> int:
    """Delete every session whose expiry has passed. Returns how many went."""
    now = now or utcnow()
    repo = current_domain.repository_for(CustomerSession)
    expired = repo.expired(now)
    for session in expired:
        repo.remove(session)

    logger.info("Expired sessions purged", count=len(expired))
    return len(expired)
