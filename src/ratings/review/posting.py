"""PostReview — a customer reviews one of their completed bookings.

The booking must exist, belong to the customer, be completed and have a
provider assigned. Only one review may exist per (booking, customer); the
check needs a repository query, so it lives in the handler.
"""

import structlog
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ratings.domain import ratings
from ratings.eligibility import check_booking, find_review_for_booking
from ratings.errors import DuplicateReview
from ratings.review.review import Review
from ratings.summary.aggregator import recompute_rating_summary

logger = structlog.get_logger(__name__)


@ratings.command(part_of="Review")
class PostReview:
    booking_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()


@ratings.command_handler(part_of=Review)
class PostReviewHandler:
    @handle(PostReview)
    def post_review(self, command):
        booking = check_booking(command.booking_id, command.customer_id)

        if find_review_for_booking(command.booking_id, command.customer_id) is not None:
            raise DuplicateReview("You have already reviewed this booking")

        review = Review.post(
            booking_id=command.booking_id,
            customer_id=command.customer_id,
            provider_id=booking.provider_id,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(Review).add(review)
        recompute_rating_summary(review.provider_id, changed=[review])

        logger.info(
            "review_posted",
            review_id=str(review.id),
            booking_id=str(review.booking_id),
            provider_id=str(review.provider_id),
            rating=review.rating.score,
        )
        return review.snapshot()
