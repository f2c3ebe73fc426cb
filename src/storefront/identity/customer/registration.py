"""Customer registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, String
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import storefront
from storefront.errors import AlreadyExists, InvalidRequest
from storefront.identity.customer.customer import Customer
from storefront.identity.customer.passwords import POLICY_MESSAGE, hash_password, password_checks
from storefront.notifications.messages import send_verification_code
from storefront.shared.email import normalize_email
from storefront.shared.phone import normalize_phone


@storefront.command(part_of="Customer")
class RegisterCustomer:
    """Create an unverified account and mail out a verification code."""

    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    first_name: String(required=True, max_length=50)
    last_name: String(required=True, max_length=50)
    phone: String(max_length=20)
    agree_to_terms: Boolean(default=False)


@storefront.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        if not command.agree_to_terms:
            raise InvalidRequest("You must agree to the Terms of Service", reason="terms_not_accepted")

        email = normalize_email(command.email)

        checks = password_checks(command.password)
        if not all(checks.values()):
            failed = [name for name, passed in checks.items() if not passed]
            raise InvalidRequest(POLICY_MESSAGE, reason="weak_password", failed_checks=failed)

        repo = current_domain.repository_for(Customer)
        if repo.email_taken(email):
            raise AlreadyExists("An account with this email already exists")

        customer = Customer.register(
            email=email,
            password_hash=hash_password(command.password),
            first_name=command.first_name,
            last_name=command.last_name,
            phone=normalize_phone(command.phone),
        )
        code = customer.issue_verification_code()
        try:
            repo.add(customer)
        except ValidationError as exc:
            # A concurrent registration took the address after the check above
            if "email" in (exc.messages or {}):
                raise AlreadyExists("An account with this email already exists") from None
            raise

        send_verification_code(
            customer.email,
            customer.first_name,
            code,
            ttl_minutes=int(config.verification_code_ttl().total_seconds() // 60),
        )
        return customer.email
