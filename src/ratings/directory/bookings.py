"""BookingRecord — what the Ratings domain knows about bookings.

Populated from the Booking domain's events. Serves ``get_booking`` for the
eligibility checks; the booking lifecycle itself is owned elsewhere.
"""

from enum import Enum

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.bookings import BookingStatusChanged, ProviderAssigned

from ratings.domain import ratings
from ratings.review.review import Review

logger = structlog.get_logger(__name__)

ratings.register_external_event(BookingStatusChanged, "Bookings.BookingStatusChanged.v1")
ratings.register_external_event(ProviderAssigned, "Bookings.ProviderAssigned.v1")


class BookingStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@ratings.projection
class BookingRecord:
    booking_id = Identifier(identifier=True, required=True)
    customer_id = Identifier(required=True)
    provider_id = Identifier()
    status = String(required=True, max_length=30)
    updated_at = DateTime()


def get_booking(booking_id):
    """Return the BookingRecord for ``booking_id``, or None when unknown."""
    try:
        return current_domain.repository_for(BookingRecord).get(booking_id)
    except ObjectNotFoundError:
        return None


def _upsert(booking_id, customer_id, updated_at, **changes):
    repo = current_domain.repository_for(BookingRecord)
    try:
        record = repo.get(booking_id)
    except ObjectNotFoundError:
        record = BookingRecord(
            booking_id=booking_id,
            customer_id=customer_id,
            status=BookingStatus.PENDING.value,
        )

    for field_name, value in changes.items():
        setattr(record, field_name, value)
    record.updated_at = updated_at
    repo.add(record)
    return record


@ratings.event_handler(part_of=Review, stream_category="bookings::booking")
class BookingEventsHandler:
    """Keeps BookingRecord in step with the Booking domain."""

    @handle(BookingStatusChanged)
    def on_booking_status_changed(self, event: BookingStatusChanged) -> None:
        changes = {"status": str(event.status).lower()}
        if event.provider_id:
            changes["provider_id"] = str(event.provider_id)

        record = _upsert(str(event.booking_id), str(event.customer_id), event.changed_at, **changes)
        logger.info(
            "booking_record_updated",
            booking_id=str(record.booking_id),
            status=record.status,
        )

    @handle(ProviderAssigned)
    def on_provider_assigned(self, event: ProviderAssigned) -> None:
        record = _upsert(
            str(event.booking_id),
            str(event.customer_id),
            event.assigned_at,
            provider_id=str(event.provider_id),
        )
        logger.info(
            "booking_record_updated",
            booking_id=str(record.booking_id),
            provider_id=str(record.provider_id),
        )
