"""Password policy and bcrypt hashing."""

from functools import lru_cache

import bcrypt

from storefront import config

MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes and refuses longer input
MAX_BYTES = 72

POLICY_MESSAGE = (
    "Password must be at least 8 characters and contain uppercase, "
    "lowercase, number and special character"
)


def password_checks(password: str) -> dict[str, bool]:
    """Individual policy checks, keyed by requirement."""
    return {
        "min_length": len(password) >= MIN_LENGTH,
        "max_length": len(password.encode("utf-8")) <= MAX_BYTES,
        "uppercase": any(ch.isupper() for ch in password),
        "lowercase": any(ch.islower() for ch in password),
        "number": any(ch.isdigit() for ch in password),
        "special": any(not ch.isalnum() and not ch.isspace() for ch in password),
    }


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=config.bcrypt_rounds())
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Over-long input or a malformed stored hash
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("dummy-password-for-timing")


def burn_password_check(password: str) -> None:
    """Spend the same time as a real check when the account does not exist."""
    verify_password(password, _dummy_hash())
