"""Aggregation engine — sole writer of RatingSummary.

``recompute_rating_summary`` runs inside the command handler that changed
the reviews, in the same unit of work, so a failed recompute rolls the
review write back with it. The summary is always rebuilt from the full set
of visible reviews; it is never patched with a delta.
"""

from datetime import UTC, datetime

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ratings.errors import AggregationFailure
from ratings.review.review import Review
from ratings.summary.rating_summary import RatingSummary, serialize_histogram, summarize
from ratings.utils.queries import fetch_all

logger = structlog.get_logger(__name__)


def visible_scores(provider_id, changed=(), removed=()):
    """Ratings of the provider's visible reviews.

    ``changed`` and ``removed`` overlay the current command's own writes on
    what the store returns, whether or not the store already exposes them.
    """
    repo = current_domain.repository_for(Review)
    stored = fetch_all(repo._dao.query.filter(provider_id=str(provider_id), is_visible=True))
    scores = {str(review.id): review.rating.score for review in stored}

    for review in changed:
        if review.is_visible:
            scores[str(review.id)] = review.rating.score
        else:
            scores.pop(str(review.id), None)
    for review_id in removed:
        scores.pop(str(review_id), None)

    return scores.values()


def recompute_rating_summary(provider_id, changed=(), removed=()):
    """Rebuild and store the provider's RatingSummary. Returns the stored summary."""
    try:
        computed = summarize(visible_scores(provider_id, changed=changed, removed=removed))

        repo = current_domain.repository_for(RatingSummary)
        try:
            summary = repo.get(str(provider_id))
        except ObjectNotFoundError:
            summary = RatingSummary(provider_id=str(provider_id))

        summary.average_rating = computed["average_rating"]
        summary.visible_review_count = computed["visible_review_count"]
        summary.star_histogram = serialize_histogram(computed["star_histogram"])
        summary.updated_at = datetime.now(UTC)
        repo.add(summary)
    except Exception as exc:
        logger.error("rating_recompute_failed", provider_id=str(provider_id), error=str(exc))
        raise AggregationFailure(f"Could not recompute the rating summary for provider {provider_id}") from exc

    logger.debug(
        "rating_summary_recomputed",
        provider_id=str(provider_id),
        average_rating=summary.average_rating,
        visible_review_count=summary.visible_review_count,
    )
    return summary
