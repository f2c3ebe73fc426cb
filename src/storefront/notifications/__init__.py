"""Outbound mail adapter registry.

`get_mailer()` returns the process-wide adapter selected by `MAIL_ADAPTER`:
``memory`` (default) keeps messages in a list, ``log`` writes them to the
structured log. Delivery providers plug in by implementing `EmailPort`.
"""

import os

from storefront.notifications.email_port import EmailPort

_mailer: EmailPort | None = None


def get_mailer() -> EmailPort:
    """Return the configured mail adapter (singleton)."""
    global _mailer
    if _mailer is None:
        adapter = os.getenv("MAIL_ADAPTER", "memory").lower()
        if adapter == "memory":
            from storefront.notifications.adapters import InMemoryEmailAdapter

            _mailer = InMemoryEmailAdapter()
        elif adapter == "log":
            from storefront.notifications.adapters import LoggingEmailAdapter

            _mailer = LoggingEmailAdapter()
        else:
            raise ValueError(f"Unknown mail adapter: {adapter}")
    return _mailer


def set_mailer(mailer: EmailPort) -> None:
    global _mailer
    _mailer = mailer


def reset_mailer() -> None:
    """Forget the current adapter (useful for testing)."""
    global _mailer
    _mailer = None
