"""DeleteReview — remove a review; the owner or an administrator may do so.

Deleted reviews are removed from the store outright. Audit entries that
reference them keep the review id.
"""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ratings.domain import ratings
from ratings.review.review import ActorRole, Review, get_review
from ratings.summary.aggregator import recompute_rating_summary


@ratings.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=ActorRole)


@ratings.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        review = get_review(command.review_id)
        review.discard(command.actor_id, command.actor_role)

        current_domain.repository_for(Review)._dao.delete(review)
        recompute_rating_summary(review.provider_id, removed=[review.id])

        return review.snapshot()
