"""Email verification: confirm a code, or ask for a new one."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import storefront
from storefront.errors import InvalidVerificationCode, NotFound
from storefront.identity.customer.customer import Customer
from storefront.notifications.messages import send_verification_code, send_welcome
from storefront.shared.email import normalize_email


@storefront.command(part_of="Customer")
class VerifyEmail:
    email: String(required=True, max_length=254)
    code: String(required=True, max_length=10)


@storefront.command(part_of="Customer")
class ResendVerificationCode:
    email: String(required=True, max_length=254)


@storefront.command_handler(part_of=Customer)
class VerificationHandler:
    @handle(VerifyEmail)
    def verify_email(self, command):
        """Mark the account verified. Returns the customer id."""
        repo = current_domain.repository_for(Customer)
        customer = repo.find_by_email(normalize_email(command.email))
        if customer is None:
            # Unknown addresses look exactly like a wrong code
            raise InvalidVerificationCode()

        customer.verify_email(command.code)
        repo.add(customer)

        send_welcome(customer.email, customer.first_name)
        return str(customer.id)

    @handle(ResendVerificationCode)
    def resend_verification_code(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.find_by_email(normalize_email(command.email))
        if customer is None or customer.is_verified:
            raise NotFound("Customer not found or already verified")

        code = customer.issue_verification_code()
        repo.add(customer)

        send_verification_code(
            customer.email,
            customer.first_name,
            code,
            ttl_minutes=int(config.verification_code_ttl().total_seconds() // 60),
        )
        return customer.email
