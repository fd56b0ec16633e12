"""Review aggregate (CQRS) — the single store of provider reviews.

One aggregate covers both organic reviews (a customer reviewing a completed
booking) and admin-authored reviews; ``is_admin_created`` discriminates them.
The provider's Rating Summary is derived from the visible reviews only.

Visibility state machine:
    Visible ⇄ Hidden   (admin toggle; initial state Visible, no terminal state)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, Text, ValueObject
from protean.utils.globals import current_domain

from ratings.domain import ratings
from ratings.errors import Forbidden, NotFound
from ratings.review.events import (
    AdminReviewAuthored,
    ReviewDeleted,
    ReviewPosted,
    ReviewRevised,
    ReviewVisibilityToggled,
)

COMMENT_MAX_LENGTH = 500

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class ActorRole(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


# Fields each kind of actor may change through a revision
CUSTOMER_EDITABLE_FIELDS = frozenset({"rating", "comment"})
ADMIN_EDITABLE_FIELDS = frozenset({"rating", "comment", "admin_notes", "is_visible"})
MODERATION_FIELDS = frozenset({"is_visible"})


def is_admin(actor_role) -> bool:
    return ActorRole(actor_role) == ActorRole.ADMIN


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ratings.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ratings.aggregate
class Review:
    """A rating of a provider, written by a customer or by an administrator."""

    booking_id = Identifier()
    customer_id = Identifier()
    provider_id = Identifier(required=True)

    rating = ValueObject(Rating, required=True)
    comment = Text()

    is_admin_created = Boolean(default=False)
    admin_created_by = Identifier()
    admin_notes = Text()

    is_visible = Boolean(default=True)
    is_verified = Boolean(default=True)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def comment_within_length_limit(self):
        if self.comment and len(self.comment) > COMMENT_MAX_LENGTH:
            raise ValidationError({"comment": [f"Comment must be at most {COMMENT_MAX_LENGTH} characters"]})

    @invariant.post
    def admin_reviews_record_their_author(self):
        if self.is_admin_created and not self.admin_created_by:
            raise ValidationError({"admin_created_by": ["Admin-created reviews must record the creating admin"]})

    @invariant.post
    def organic_reviews_reference_booking_and_customer(self):
        if not self.is_admin_created and (not self.booking_id or not self.customer_id):
            raise ValidationError({"booking_id": ["Customer reviews must reference a booking and a customer"]})

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def post(cls, booking_id, customer_id, provider_id, rating, comment=None):
        """Create an organic review for a completed booking."""
        now = datetime.now(UTC)

        review = cls(
            booking_id=booking_id,
            customer_id=customer_id,
            provider_id=provider_id,
            rating=Rating(score=rating),
            comment=comment,
            is_admin_created=False,
            is_visible=True,
            is_verified=True,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewPosted(
                review_id=str(review.id),
                booking_id=str(booking_id),
                customer_id=str(customer_id),
                provider_id=str(provider_id),
                rating=rating,
                comment=comment,
                posted_at=now,
            )
        )

        return review

    @classmethod
    def author(
        cls,
        provider_id,
        admin_id,
        rating,
        comment=None,
        customer_id=None,
        admin_notes=None,
        is_verified=True,
    ):
        """Create a review directly on behalf of an administrator."""
        now = datetime.now(UTC)

        review = cls(
            booking_id=None,
            customer_id=customer_id,
            provider_id=provider_id,
            rating=Rating(score=rating),
            comment=comment,
            is_admin_created=True,
            admin_created_by=admin_id,
            admin_notes=admin_notes,
            is_visible=True,
            is_verified=is_verified,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            AdminReviewAuthored(
                review_id=str(review.id),
                provider_id=str(provider_id),
                customer_id=str(customer_id) if customer_id else None,
                admin_id=str(admin_id),
                rating=rating,
                comment=comment,
                is_verified=is_verified,
                authored_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # Permissions
    # -------------------------------------------------------------------
    def _assert_actor_may_modify(self, actor_id, actor_role):
        """Customers may only touch their own reviews; admins may touch any."""
        if is_admin(actor_role):
            return
        if not self.customer_id or str(self.customer_id) != str(actor_id):
            raise Forbidden("You can only modify your own reviews")

    def _editable_fields(self, actor_role):
        if not is_admin(actor_role):
            return CUSTOMER_EDITABLE_FIELDS
        if self.is_admin_created:
            return ADMIN_EDITABLE_FIELDS
        # Admins moderate customer reviews; they never rewrite what a customer said
        return MODERATION_FIELDS

    # -------------------------------------------------------------------
    # Revision
    # -------------------------------------------------------------------
    def revise(
        self,
        actor_id,
        actor_role,
        rating=_UNSET,
        comment=_UNSET,
        admin_notes=_UNSET,
        is_visible=_UNSET,
    ):
        """Apply a partial update and return the names of fields that changed."""
        requested = {
            name: value
            for name, value in (
                ("rating", rating),
                ("comment", comment),
                ("admin_notes", admin_notes),
                ("is_visible", is_visible),
            )
            if value is not _UNSET
        }
        if not requested:
            raise ValidationError({"review": ["No changes supplied"]})

        self._assert_actor_may_modify(actor_id, actor_role)

        disallowed = set(requested) - self._editable_fields(actor_role)
        if disallowed:
            raise Forbidden(f"Not allowed to change {', '.join(sorted(disallowed))} on this review")

        changed = set()
        now = datetime.now(UTC)

        with atomic_change(self):
            if "rating" in requested and requested["rating"] != self.rating.score:
                self.rating = Rating(score=requested["rating"])
                changed.add("rating")
            if "comment" in requested and requested["comment"] != self.comment:
                self.comment = requested["comment"]
                changed.add("comment")
            if "admin_notes" in requested and requested["admin_notes"] != self.admin_notes:
                self.admin_notes = requested["admin_notes"]
                changed.add("admin_notes")
            if "is_visible" in requested and requested["is_visible"] != self.is_visible:
                self.is_visible = requested["is_visible"]
                changed.add("is_visible")

            if changed:
                self.updated_at = now

        if changed:
            self.raise_(
                ReviewRevised(
                    review_id=str(self.id),
                    provider_id=str(self.provider_id),
                    revised_by=str(actor_id),
                    changed_fields=",".join(sorted(changed)),
                    rating=self.rating.score,
                    is_visible=self.is_visible,
                    revised_at=now,
                )
            )

        return changed

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def toggle_visibility(self, actor_id, actor_role):
        """Flip between Visible and Hidden. Admin only."""
        if not is_admin(actor_role):
            raise Forbidden("Only administrators can change review visibility")

        now = datetime.now(UTC)
        self.is_visible = not self.is_visible
        self.updated_at = now

        self.raise_(
            ReviewVisibilityToggled(
                review_id=str(self.id),
                provider_id=str(self.provider_id),
                toggled_by=str(actor_id),
                is_visible=self.is_visible,
                toggled_at=now,
            )
        )

        return self.is_visible

    # -------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------
    def discard(self, actor_id, actor_role):
        """Check deletion rights and record the deletion fact."""
        self._assert_actor_may_modify(actor_id, actor_role)

        self.raise_(
            ReviewDeleted(
                review_id=str(self.id),
                provider_id=str(self.provider_id),
                deleted_by=str(actor_id),
                rating=self.rating.score,
                deleted_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------
    def snapshot(self):
        """Plain-dict copy of the review used for audit before/after states."""
        return {
            "id": str(self.id),
            "booking_id": str(self.booking_id) if self.booking_id else None,
            "customer_id": str(self.customer_id) if self.customer_id else None,
            "provider_id": str(self.provider_id),
            "rating": self.rating.score,
            "comment": self.comment,
            "is_admin_created": self.is_admin_created,
            "admin_created_by": str(self.admin_created_by) if self.admin_created_by else None,
            "admin_notes": self.admin_notes,
            "is_visible": self.is_visible,
            "is_verified": self.is_verified,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def public_snapshot(self):
        """Snapshot without admin-only metadata, for public listings."""
        snapshot = self.snapshot()
        del snapshot["admin_notes"]
        del snapshot["admin_created_by"]
        return snapshot


def get_review(review_id):
    try:
        return current_domain.repository_for(Review).get(str(review_id))
    except ObjectNotFoundError:
        raise NotFound(f"Review {review_id} not found")
