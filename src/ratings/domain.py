"""Ratings bounded context — provider reviews, rating summaries, moderation.

Accepts customer-authored and admin-authored reviews of service providers,
keeps one recomputed Rating Summary per provider, and records an audit
trail of every administrative mutation.
"""

from protean.domain import Domain

from ratings.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ratings = Domain(name="ratings")
