"""Mail adapters that need no external provider."""

from uuid import uuid4

import structlog

from storefront import config
from storefront.notifications.email_port import DeliveryResult, EmailPort

logger = structlog.get_logger(__name__)


class InMemoryEmailAdapter(EmailPort):
    """Records messages in memory so they can be inspected."""

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> DeliveryResult:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "from": config.mail_from(),
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def messages_to(self, address: str) -> list[dict]:
        return [message for message in self.sent_emails if message["to"] == address]

    def reset(self):
        self.sent_emails.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"


class LoggingEmailAdapter(EmailPort):
    """Writes message metadata to the log instead of delivering it.

    Bodies are not logged: they can hold verification codes.
    """

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> DeliveryResult:
        message_id = f"email-{uuid4().hex[:12]}"
        logger.info("Email dispatched", message_id=message_id, to=to, subject=subject)
        return {"message_id": message_id, "status": "sent"}
