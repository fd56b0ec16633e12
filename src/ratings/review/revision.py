"""ReviseReview — partial update of a review by its owner or an administrator.

``changes`` holds only the fields the caller supplied, so an explicit null
(clearing a comment) is distinguishable from an omitted field. Which fields
an actor may touch is decided by ``Review.revise``.
"""

import json

from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ratings.domain import ratings
from ratings.review.review import ADMIN_EDITABLE_FIELDS, ActorRole, Review, get_review
from ratings.summary.aggregator import recompute_rating_summary

# Changes to these fields alter what the rating summary is computed from
SUMMARY_FIELDS = frozenset({"rating", "is_visible"})


@ratings.command(part_of="Review")
class ReviseReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=ActorRole)
    changes = Text(required=True)  # JSON object of field name -> new value


@ratings.command_handler(part_of=Review)
class ReviseReviewHandler:
    @handle(ReviseReview)
    def revise_review(self, command):
        changes = json.loads(command.changes)
        unknown = set(changes) - ADMIN_EDITABLE_FIELDS
        if unknown:
            raise ValidationError({field: ["Unknown field"] for field in sorted(unknown)})

        review = get_review(command.review_id)
        changed = review.revise(command.actor_id, command.actor_role, **changes)
        current_domain.repository_for(Review).add(review)

        if changed & SUMMARY_FIELDS:
            recompute_rating_summary(review.provider_id, changed=[review])

        return review.snapshot()
