"""SyntheticCustomer aggregate — placeholder identities for admin-authored reviews.

A synthetic customer lets an admin-authored review carry a display name
("Jane D.") without a real customer account behind it. Synthetic customers
are never active and can never log in; the marker tells them apart from
real accounts.
"""

import secrets
import time
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from ratings.domain import ratings

SYNTHETIC_MARKER = "synthetic_customer"
DEFAULT_LAST_NAME = "Customer"
PLACEHOLDER_EMAIL_DOMAIN = "placeholder.invalid"


def placeholder_email():
    """A contact identifier no real account can hold and no two placeholders share."""
    return f"synthetic.{time.time_ns()}.{secrets.token_hex(4)}@{PLACEHOLDER_EMAIL_DOMAIN}"


@ratings.aggregate
class SyntheticCustomer:
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    marker = String(required=True, max_length=50, default=SYNTHETIC_MARKER)
    placeholder_email = String(required=True, max_length=254)
    is_active = Boolean(default=False)
    created_at = DateTime()

    @invariant.post
    def must_stay_inactive(self):
        if self.is_active:
            raise ValidationError({"is_active": ["Synthetic customers cannot be activated"]})

    @invariant.post
    def must_carry_synthetic_marker(self):
        if self.marker != SYNTHETIC_MARKER:
            raise ValidationError({"marker": ["Synthetic customers must carry the synthetic marker"]})

    @classmethod
    def create(cls, first_name, last_name=None):
        return cls(
            first_name=first_name,
            last_name=last_name or DEFAULT_LAST_NAME,
            marker=SYNTHETIC_MARKER,
            placeholder_email=placeholder_email(),
            is_active=False,
            created_at=datetime.now(UTC),
        )

    @property
    def display_name(self):
        return f"{self.first_name} {self.last_name}"
