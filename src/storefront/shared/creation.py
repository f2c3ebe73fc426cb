"""Lazy creation of per-customer singleton aggregates.

Carts and wishlists are created on first use. Two concurrent requests may
both find nothing and both try to insert; the loser sees a uniqueness
violation and re-reads the winner's record instead.
"""

import time
from typing import Callable, TypeVar

import structlog
from protean.exceptions import ValidationError

from storefront.errors import StorefrontError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 3
BACKOFF_SECONDS = 0.05


def get_or_create(
    repository,
    find: Callable[[], T | None],
    build: Callable[[], T],
    *,
    unique_field: str,
    attempts: int = MAX_ATTEMPTS,
    backoff: float = BACKOFF_SECONDS,
) -> T:
    """Return the record `find` locates, creating it with `build` if absent.

    Only a `ValidationError` naming `unique_field` is retried; any other
    failure propagates. Waits `backoff * attempt` seconds between attempts.
    """
    for attempt in range(1, attempts + 1):
        existing = find()
        if existing is not None:
            return existing

        candidate = build()
        try:
            repository.add(candidate)
            return candidate
        except ValidationError as exc:
            if unique_field not in (exc.messages or {}):
                raise
            logger.info(
                "Concurrent creation detected, retrying",
                record=type(candidate).__name__,
                attempt=attempt,
            )
            time.sleep(backoff * attempt)

    existing = find()
    if existing is None:
        raise StorefrontError("Could not create record, please retry")
    return existing
