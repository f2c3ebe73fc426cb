"""The one capability the storefront needs from a mail provider."""

from abc import ABC, abstractmethod
from typing import Literal, NotRequired, TypedDict


class DeliveryResult(TypedDict):
    message_id: str | None
    status: Literal["sent", "failed"]
    error: NotRequired[str]


class EmailPort(ABC):
    """Hands a plain-text message, optionally with an HTML part, to a provider.

    Adapters report failures in the result instead of raising, so callers
    can decide whether an undelivered message should fail the request.
    """

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DeliveryResult: ...
