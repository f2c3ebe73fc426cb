"""Runtime settings read from the environment.

Values are read on every call so tests and the operations CLI can override
them through environment variables without reloading modules.
"""

import os
from datetime import timedelta


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def environment() -> str:
    """Deployment environment name, lower-cased."""
    return (
        os.getenv("STOREFRONT_ENV")
        or os.getenv("ENVIRONMENT")
        or os.getenv("PROTEAN_ENV")
        or "development"
    ).lower()


def is_production() -> bool:
    return environment() == "production"


def session_ttl() -> timedelta:
    return timedelta(days=_int("SESSION_TTL_DAYS", 7))


def verification_code_ttl() -> timedelta:
    return timedelta(minutes=_int("VERIFICATION_CODE_TTL_MINUTES", 10))


def max_login_attempts() -> int:
    return _int("MAX_LOGIN_ATTEMPTS", 5)


def lockout_duration() -> timedelta:
    return timedelta(hours=_int("LOCKOUT_HOURS", 2))


def bcrypt_rounds() -> int:
    return _int("BCRYPT_ROUNDS", 12)


def mail_from() -> str:
    return os.getenv("MAIL_FROM", "IVMA Store <no-reply@ivmastore.com>")


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
