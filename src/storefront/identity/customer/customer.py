"""Customer aggregate: credentials, email verification and login lockout."""

import hmac
import secrets
from datetime import datetime

from protean.fields import Boolean, DateTime, Float, Integer, String

from storefront import config
from storefront.domain import storefront
from storefront.errors import InvalidVerificationCode
from storefront.identity.customer.events import (
    AccountLocked,
    CustomerLoggedIn,
    CustomerRegistered,
    CustomerVerified,
    LoginFailed,
    VerificationCodeIssued,
)
from storefront.shared.clock import as_utc, utcnow


def generate_verification_code() -> str:
    """Six decimal digits from the OS CSPRNG."""
    return f"{100000 + secrets.randbelow(900000)}"


@storefront.aggregate
class Customer:
    """A shopper who can sign in to any store on the platform.

    Email is the login identifier and is stored trimmed and lower-cased.
    Only the bcrypt hash of the password is kept. Accounts are deactivated,
    never deleted.
    """

    email: String(required=True, max_length=254, unique=True)
    first_name: String(required=True, max_length=50)
    last_name: String(required=True, max_length=50)
    phone: String(max_length=20)
    password_hash: String(required=True, max_length=128)
    is_verified: Boolean(default=False)
    is_active: Boolean(default=True)
    verification_code: String(max_length=6)
    verification_code_expires_at: DateTime()
    login_attempts: Integer(default=0, min_value=0)
    locked_until: DateTime()
    last_login_at: DateTime()
    total_orders: Integer(default=0, min_value=0)
    total_spent: Float(default=0.0, min_value=0.0)
    last_order_at: DateTime()
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @classmethod
    def register(cls, email, password_hash, first_name, last_name, phone=None, now=None):
        now = now or utcnow()
        customer = cls(
            email=email,
            password_hash=password_hash,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            phone=phone,
            created_at=now,
            updated_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                email=customer.email,
                first_name=customer.first_name,
                last_name=customer.last_name,
                registered_at=now,
            )
        )
        return customer

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def issue_verification_code(self, now: datetime | None = None) -> str:
        """Replace any pending code with a fresh one and return it."""
        now = now or utcnow()
        code = generate_verification_code()
        self.verification_code = code
        self.verification_code_expires_at = now + config.verification_code_ttl()
        self.updated_at = now
        self.raise_(
            VerificationCodeIssued(
                customer_id=str(self.id),
                email=self.email,
                expires_at=self.verification_code_expires_at,
            )
        )
        return code

    def has_valid_verification_code(self, code: str | None, now: datetime | None = None) -> bool:
        now = now or utcnow()
        if not code or not self.verification_code or not self.verification_code_expires_at:
            return False
        if not now < as_utc(self.verification_code_expires_at):
            return False
        return hmac.compare_digest(self.verification_code.encode(), code.strip().encode())

    def verify_email(self, code: str | None, now: datetime | None = None) -> None:
        now = now or utcnow()
        if not self.has_valid_verification_code(code, now):
            raise InvalidVerificationCode()

        self.is_verified = True
        self.verification_code = None
        self.verification_code_expires_at = None
        self.updated_at = now
        self.raise_(CustomerVerified(customer_id=str(self.id), email=self.email, verified_at=now))

    def is_locked(self, now: datetime | None = None) -> bool:
        now = now or utcnow()
        return self.locked_until is not None and as_utc(self.locked_until) > now

    def record_failed_login(self, now: datetime | None = None) -> bool:
        """Count a wrong password. Returns True when this attempt locked the account.

        A lock that has already run out starts the count again at one.
        """
        now = now or utcnow()
        if self.locked_until is not None and not self.is_locked(now):
            self.locked_until = None
            self.login_attempts = 1
        else:
            self.login_attempts = (self.login_attempts or 0) + 1

        self.updated_at = now
        self.raise_(
            LoginFailed(
                customer_id=str(self.id),
                email=self.email,
                attempts=self.login_attempts,
                failed_at=now,
            )
        )

        if self.login_attempts >= config.max_login_attempts() and not self.is_locked(now):
            self.locked_until = now + config.lockout_duration()
            self.raise_(
                AccountLocked(
                    customer_id=str(self.id),
                    email=self.email,
                    locked_until=self.locked_until,
                )
            )
            return True
        return False

    def record_login(self, now: datetime | None = None) -> None:
        now = now or utcnow()
        self.login_attempts = 0
        self.locked_until = None
        self.last_login_at = now
        self.updated_at = now
        self.raise_(CustomerLoggedIn(customer_id=str(self.id), email=self.email, logged_in_at=now))

    def record_order(self, amount: float, now: datetime | None = None) -> None:
        """Keep the running shopping totals shown on the account."""
        now = now or utcnow()
        self.total_orders = (self.total_orders or 0) + 1
        self.total_spent = round((self.total_spent or 0.0) + amount, 2)
        self.last_order_at = now
        self.updated_at = now


@storefront.repository(part_of=Customer)
class CustomerRepository:
    def find_by_email(self, email: str) -> Customer | None:
        """Look up an active customer by an already-normalized email."""
        results = self._dao.query.filter(email=email, is_active=True).all().items
        return results[0] if results else None

    def email_taken(self, email: str) -> bool:
        return self._dao.query.filter(email=email).all().total > 0
