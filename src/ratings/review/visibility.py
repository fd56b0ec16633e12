"""ToggleReviewVisibility — show or hide a review (moderation)."""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ratings.domain import ratings
from ratings.review.review import ActorRole, Review, get_review
from ratings.summary.aggregator import recompute_rating_summary


@ratings.command(part_of="Review")
class ToggleReviewVisibility:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, choices=ActorRole)


@ratings.command_handler(part_of=Review)
class ToggleReviewVisibilityHandler:
    @handle(ToggleReviewVisibility)
    def toggle_review_visibility(self, command):
        review = get_review(command.review_id)
        review.toggle_visibility(command.actor_id, command.actor_role)

        current_domain.repository_for(Review).add(review)
        recompute_rating_summary(review.provider_id, changed=[review])

        return review.snapshot()
