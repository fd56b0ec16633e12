"""AuthorAdminReview / BulkAuthorAdminReviews — administrators write reviews directly.

Admin-authored reviews carry no booking. When a display name is given the
review is attributed to a synthetic customer (see ``ratings.customers``).
The provider must be a known provider of a rateable role.
"""

import json

import structlog
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ratings.customers.resolver import resolve_synthetic_customer
from ratings.directory.providers import get_rateable_provider
from ratings.domain import ratings
from ratings.errors import NotFound
from ratings.review.review import COMMENT_MAX_LENGTH, Review
from ratings.summary.aggregator import recompute_rating_summary

logger = structlog.get_logger(__name__)

MAX_BULK_ENTRIES = 50


@ratings.command(part_of="Review")
class AuthorAdminReview:
    provider_id = Identifier(required=True)
    admin_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    display_name = String(max_length=200)
    admin_notes = Text()
    is_verified = Boolean(default=True)


@ratings.command(part_of="Review")
class BulkAuthorAdminReviews:
    provider_id = Identifier(required=True)
    admin_id = Identifier(required=True)
    entries = Text(required=True)  # JSON array of {rating, comment, display_name, admin_notes, is_verified}


def _require_rateable_provider(provider_id):
    provider = get_rateable_provider(str(provider_id))
    if provider is None:
        raise NotFound(f"Provider {provider_id} not found")
    return provider


def _validate_entries(entries):
    if not isinstance(entries, list) or not entries:
        raise ValidationError({"entries": ["At least one review entry is required"]})
    if len(entries) > MAX_BULK_ENTRIES:
        raise ValidationError({"entries": [f"At most {MAX_BULK_ENTRIES} reviews can be created at once"]})

    errors = {}
    for position, entry in enumerate(entries):
        messages = []
        rating = entry.get("rating") if isinstance(entry, dict) else None
        if not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5:
            messages.append("Rating must be between 1 and 5")
        comment = entry.get("comment") if isinstance(entry, dict) else None
        if comment and len(comment) > COMMENT_MAX_LENGTH:
            messages.append(f"Comment must be at most {COMMENT_MAX_LENGTH} characters")
        if messages:
            errors[f"entries[{position}]"] = messages
    if errors:
        raise ValidationError(errors)


def _author(provider_id, admin_id, rating, comment=None, display_name=None, admin_notes=None, is_verified=True, resolved=None):
    customer_id = None
    if display_name:
        customer_id = resolve_synthetic_customer(display_name, resolved=resolved)

    review = Review.author(
        provider_id=provider_id,
        admin_id=admin_id,
        rating=rating,
        comment=comment,
        customer_id=customer_id,
        admin_notes=admin_notes,
        is_verified=True if is_verified is None else is_verified,
    )
    current_domain.repository_for(Review).add(review)
    return review


@ratings.command_handler(part_of=Review)
class AdminReviewAuthoringHandler:
    @handle(AuthorAdminReview)
    def author_admin_review(self, command):
        _require_rateable_provider(command.provider_id)

        review = _author(
            provider_id=command.provider_id,
            admin_id=command.admin_id,
            rating=command.rating,
            comment=command.comment,
            display_name=command.display_name,
            admin_notes=command.admin_notes,
            is_verified=command.is_verified,
        )
        recompute_rating_summary(review.provider_id, changed=[review])

        logger.info(
            "admin_review_authored",
            review_id=str(review.id),
            provider_id=str(review.provider_id),
            admin_id=str(command.admin_id),
            rating=review.rating.score,
        )
        return review.snapshot()

    @handle(BulkAuthorAdminReviews)
    def bulk_author_admin_reviews(self, command):
        _require_rateable_provider(command.provider_id)

        entries = json.loads(command.entries)
        _validate_entries(entries)

        resolved = {}
        created = [
            _author(
                provider_id=command.provider_id,
                admin_id=command.admin_id,
                rating=entry["rating"],
                comment=entry.get("comment"),
                display_name=entry.get("display_name"),
                admin_notes=entry.get("admin_notes"),
                is_verified=entry.get("is_verified", True),
                resolved=resolved,
            )
            for entry in entries
        ]
        recompute_rating_summary(command.provider_id, changed=created)

        logger.info(
            "admin_review_authored",
            provider_id=str(command.provider_id),
            admin_id=str(command.admin_id),
            count=len(created),
        )
        return [review.snapshot() for review in created]
