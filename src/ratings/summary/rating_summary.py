"""RatingSummary — mean, count and star histogram of a provider's visible reviews.

The summary has no state of its own: every write replaces it with
``summarize()`` over the provider's current visible ratings. Only
``ratings.summary.aggregator`` writes it.
"""

import json

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from ratings.domain import ratings

STAR_VALUES = (1, 2, 3, 4, 5)


@ratings.projection
class RatingSummary:
    provider_id = Identifier(identifier=True, required=True)
    average_rating = Float(default=0.0)
    visible_review_count = Integer(default=0)
    star_histogram = Text()  # JSON: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    updated_at = DateTime()

    def histogram(self):
        return {int(star): count for star, count in json.loads(self.star_histogram or "{}").items()}

    def to_view(self):
        return {
            "provider_id": str(self.provider_id),
            "average_rating": self.average_rating,
            "visible_review_count": self.visible_review_count,
            "star_histogram": self.histogram(),
        }


def empty_histogram():
    return {star: 0 for star in STAR_VALUES}


def summarize(scores):
    """Pure computation of a summary from an iterable of 1–5 ratings."""
    scores = list(scores)
    histogram = empty_histogram()
    for score in scores:
        histogram[score] += 1

    count = len(scores)
    average = round(sum(scores) / count, 2) if count else 0.0

    return {
        "average_rating": average,
        "visible_review_count": count,
        "star_histogram": histogram,
    }


def serialize_histogram(histogram):
    return json.dumps({str(star): histogram.get(star, 0) for star in STAR_VALUES})


def rating_summary_for(provider_id):
    """Current summary view for a provider; the empty summary when none was ever computed."""
    try:
        return current_domain.repository_for(RatingSummary).get(str(provider_id)).to_view()
    except ObjectNotFoundError:
        return {"provider_id": str(provider_id), **summarize([])}
