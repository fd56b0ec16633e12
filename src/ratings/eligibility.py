"""Eligibility checker — may this customer review this booking?

Two entry points share the same booking rules:

- ``check_booking`` is used while posting a review and raises ``NotEligible``
  with a machine-readable reason.
- ``can_review`` answers the read-only question the UI asks before showing a
  review form. An unknown or foreign booking is ``NotFound`` there; every
  other outcome is an answer, not an error.
"""

from protean.utils.globals import current_domain

from ratings.directory.bookings import BookingStatus, get_booking
from ratings.errors import NotEligible, NotFound
from ratings.review.review import Review

BOOKING_NOT_FOUND = "booking_not_found"
NOT_OWNER = "not_owner"
NOT_COMPLETED = "not_completed"
NO_PROVIDER_ASSIGNED = "no_provider_assigned"
ALREADY_REVIEWED = "already_reviewed"


def _is_owned_by(booking, customer_id) -> bool:
    return str(booking.customer_id) == str(customer_id)


def check_booking(booking_id, customer_id):
    """Return the booking when it can carry a review by ``customer_id``."""
    booking = get_booking(str(booking_id))
    if booking is None:
        raise NotEligible("Booking not found", BOOKING_NOT_FOUND)
    if not _is_owned_by(booking, customer_id):
        raise NotEligible("Booking does not belong to this customer", NOT_OWNER)
    if booking.status != BookingStatus.COMPLETED.value:
        raise NotEligible("Only completed bookings can be reviewed", NOT_COMPLETED)
    if not booking.provider_id:
        raise NotEligible("Booking has no provider assigned", NO_PROVIDER_ASSIGNED)
    return booking


def find_review_for_booking(booking_id, customer_id):
    repo = current_domain.repository_for(Review)
    existing = (
        repo._dao.query.filter(booking_id=str(booking_id), customer_id=str(customer_id)).limit(1).all().items
    )
    return existing[0] if existing else None


def can_review(customer_id, booking_id) -> dict:
    """Return ``{"eligible": bool, "reason": str | None}``."""
    booking = get_booking(str(booking_id))
    if booking is None or not _is_owned_by(booking, customer_id):
        raise NotFound("Booking not found")

    if booking.status != BookingStatus.COMPLETED.value:
        return {"eligible": False, "reason": NOT_COMPLETED}
    if not booking.provider_id:
        return {"eligible": False, "reason": NO_PROVIDER_ASSIGNED}
    if find_review_for_booking(booking_id, customer_id) is not None:
        return {"eligible": False, "reason": ALREADY_REVIEWED}
    return {"eligible": True, "reason": None}
