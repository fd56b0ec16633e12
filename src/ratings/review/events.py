"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes.
Other contexts (provider profile pages, notifications) consume them from
the ``ratings::review`` stream.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from ratings.domain import ratings


@ratings.event(part_of="Review")
class ReviewPosted:
    """A customer reviewed a completed booking."""

    __version__ = 1

    review_id = Identifier(required=True)
    booking_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    posted_at = DateTime(required=True)


@ratings.event(part_of="Review")
class AdminReviewAuthored:
    """An administrator created a review directly for a provider."""

    __version__ = 1

    review_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    customer_id = Identifier()
    admin_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    is_verified = Boolean(default=True)
    authored_at = DateTime(required=True)


@ratings.event(part_of="Review")
class ReviewRevised:
    """Review content or moderation fields changed."""

    __version__ = 1

    review_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    revised_by = Identifier(required=True)
    changed_fields = String(required=True)  # comma-separated field names
    rating = Integer(required=True)
    is_visible = Boolean(required=True)
    revised_at = DateTime(required=True)


@ratings.event(part_of="Review")
class ReviewVisibilityToggled:
    """A moderator showed or hid a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    toggled_by = Identifier(required=True)
    is_visible = Boolean(required=True)
    toggled_at = DateTime(required=True)


@ratings.event(part_of="Review")
class ReviewDeleted:
    """A review was deleted by its owner or an administrator."""

    __version__ = 1

    review_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    deleted_by = Identifier(required=True)
    rating = Integer(required=True)
    deleted_at = DateTime(required=True)
