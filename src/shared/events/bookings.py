"""Cross-domain event contracts for Booking domain events.

The booking service owns the booking lifecycle; the Ratings domain only
needs to know who booked, which provider was assigned, and the current
status, so it can decide whether a review may be posted. These classes
are registered as external events via domain.register_external_event()
with matching __type__ strings so Protean's stream deserialization works.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, String


class BookingStatusChanged(BaseEvent):
    """A booking moved to a new lifecycle status (pending, confirmed, completed, ...)."""

    __version__ = 1

    booking_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    provider_id = Identifier()
    status = String(required=True)
    changed_at = DateTime(required=True)


class ProviderAssigned(BaseEvent):
    """A provider was assigned (or re-assigned) to a booking."""

    __version__ = 1

    booking_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    assigned_at = DateTime(required=True)
