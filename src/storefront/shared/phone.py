"""PhoneNumber value object for Nigerian mobile numbers."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

NIGERIAN_MOBILE = re.compile(r"^(\+234|0)[789]\d{9}$")


@storefront.value_object
class PhoneNumber:
    """A mobile number such as ``08031234567`` or ``+2348031234567``."""

    number: String(required=True, max_length=20)

    @invariant.post
    def validate_phone_format(self):
        if not NIGERIAN_MOBILE.match(self.number):
            raise ValidationError({"phone": ["Please enter a valid Nigerian phone number"]})


def normalize_phone(raw: str | None) -> str | None:
    """Strip whitespace and validate; empty input means no phone."""
    if raw is None:
        return None
    compact = re.sub(r"\s", "", raw)
    if not compact:
        return None
    return PhoneNumber(number=compact).number
