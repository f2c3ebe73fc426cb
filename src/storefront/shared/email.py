"""EmailAddress value object for validated, normalized email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


@storefront.value_object
class EmailAddress:
    """A validated email address.

    Enforces structural validity: exactly one @, non-empty local and domain
    parts, a dotted domain, no whitespace, consecutive dots or forbidden
    characters. Addresses are compared after trimming and lower-casing, see
    `normalize_email`.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        """Ensure that the email address follows a basic valid structure."""
        email = self.address
        invalid = ValidationError({"email": ["Please provide a valid email address"]})

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise invalid

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise invalid

        if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise invalid

        if "." not in domain_part or ".." in email:
            raise invalid

        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise invalid

        if any(forbidden in email for forbidden in _FORBIDDEN):
            raise invalid


def normalize_email(raw: str | None) -> str:
    """Trim, lower-case and validate an email address.

    Raises `ValidationError` when the address is malformed.
    """
    candidate = (raw or "").strip().lower()
    if not candidate:
        raise ValidationError({"email": ["Email is required"]})
    return EmailAddress(address=candidate).address
