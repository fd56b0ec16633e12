"""Review mutations as callers see them: lock, process, audit.

Each function resolves the provider whose Rating Summary the mutation can
change, holds that provider's lock while the command (write, recompute and
commit) runs, and afterwards records administrative mutations in the audit
trail. Audit recording is best-effort and never changes the outcome.
"""

import json

from protean.utils.globals import current_domain

from ratings.audit.entry import AuditAction
from ratings.audit.trail import record_admin_action
from ratings.directory.bookings import get_booking
from ratings.review.authoring import AuthorAdminReview, BulkAuthorAdminReviews
from ratings.review.deletion import DeleteReview
from ratings.review.posting import PostReview
from ratings.review.review import get_review, is_admin
from ratings.review.revision import ReviseReview
from ratings.review.visibility import ToggleReviewVisibility
from ratings.summary.locks import provider_locks


def submit_organic_review(customer_id, booking_id, rating, comment=None):
    booking = get_booking(str(booking_id))
    provider_id = booking.provider_id if booking is not None else None

    # Without a provider the command is rejected before anything is written
    with provider_locks.hold(provider_id):
        return current_domain.process(
            PostReview(
                booking_id=booking_id,
                customer_id=customer_id,
                rating=rating,
                comment=comment,
            ),
            asynchronous=False,
        )


def submit_admin_review(
    admin_id,
    provider_id,
    rating,
    comment=None,
    display_name=None,
    admin_notes=None,
    is_verified=True,
):
    with provider_locks.hold(provider_id):
        created = current_domain.process(
            AuthorAdminReview(
                provider_id=provider_id,
                admin_id=admin_id,
                rating=rating,
                comment=comment,
                display_name=display_name,
                admin_notes=admin_notes,
                is_verified=is_verified,
            ),
            asynchronous=False,
        )

    record_admin_action(
        AuditAction.CREATE,
        actor_id=admin_id,
        review_id=created["id"],
        provider_id=provider_id,
        after=created,
    )
    return created


def submit_admin_reviews_in_bulk(admin_id, provider_id, entries):
    """Create several admin reviews for one provider; ``entries`` is a list of dicts."""
    with provider_locks.hold(provider_id):
        created = current_domain.process(
            BulkAuthorAdminReviews(
                provider_id=provider_id,
                admin_id=admin_id,
                entries=json.dumps(entries),
            ),
            asynchronous=False,
        )

    for review in created:
        record_admin_action(
            AuditAction.CREATE,
            actor_id=admin_id,
            review_id=review["id"],
            provider_id=provider_id,
            after=review,
        )
    return created


def update_review(review_id, actor_id, actor_role, changes):
    """Apply ``changes`` (only the supplied fields) to a review."""
    provider_id = get_review(review_id).provider_id

    with provider_locks.hold(provider_id):
        before = get_review(review_id).snapshot()
        after = current_domain.process(
            ReviseReview(
                review_id=review_id,
                actor_id=actor_id,
                actor_role=actor_role,
                changes=json.dumps(changes),
            ),
            asynchronous=False,
        )

    if is_admin(actor_role):
        record_admin_action(
            AuditAction.UPDATE,
            actor_id=actor_id,
            review_id=review_id,
            provider_id=provider_id,
            before=before,
            after=after,
        )
    return after


def delete_review(review_id, actor_id, actor_role, reason=None):
    provider_id = get_review(review_id).provider_id

    with provider_locks.hold(provider_id):
        before = current_domain.process(
            DeleteReview(review_id=review_id, actor_id=actor_id, actor_role=actor_role),
            asynchronous=False,
        )

    if is_admin(actor_role):
        record_admin_action(
            AuditAction.DELETE,
            actor_id=actor_id,
            review_id=review_id,
            provider_id=provider_id,
            before=before,
            after=None,
            reason=reason,
        )


def toggle_visibility(review_id, actor_id, actor_role):
    """Flip a review between Visible and Hidden. Returns the new visibility."""
    provider_id = get_review(review_id).provider_id

    with provider_locks.hold(provider_id):
        before = get_review(review_id).snapshot()
        after = current_domain.process(
            ToggleReviewVisibility(review_id=review_id, actor_id=actor_id, actor_role=actor_role),
            asynchronous=False,
        )

    record_admin_action(
        AuditAction.TOGGLE_VISIBILITY,
        actor_id=actor_id,
        review_id=review_id,
        provider_id=provider_id,
        before=before,
        after=after,
    )
    return after["is_visible"]
