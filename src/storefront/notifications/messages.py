"""Customer-facing mail composed by the identity flows."""

import structlog

from storefront.notifications import get_mailer

logger = structlog.get_logger(__name__)


def _deliver(to: str, subject: str, body: str, kind: str) -> bool:
    result = get_mailer().send(to=to, subject=subject, body=body)
    if result.get("status") != "sent":
        logger.warning("Email delivery failed", kind=kind, to=to, error=result.get("error"))
        return False
    logger.info("Email sent", kind=kind, to=to, message_id=result.get("message_id"))
    return True


def send_verification_code(email: str, first_name: str, code: str, ttl_minutes: int) -> bool:
    body = (
        f"Hi {first_name},\n\n"
        f"Your IVMA Store verification code is {code}.\n"
        f"It expires in {ttl_minutes} minutes.\n\n"
        "If you did not create an account, you can ignore this message."
    )
    return _deliver(email, "Verify your email address", body, kind="verification")


def send_welcome(email: str, first_name: str) -> bool:
    body = (
        f"Hi {first_name},\n\n"
        "Your email is verified and your IVMA Store account is ready.\n"
        "Happy shopping!"
    )
    return _deliver(email, "Welcome to IVMA Store", body, kind="welcome")
