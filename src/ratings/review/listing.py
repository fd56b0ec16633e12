"""Read side of the review store: public listings, customer and admin views.

Public views never include admin-only metadata (``admin_notes``,
``admin_created_by``). Listings are newest first.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ratings.directory.providers import RATEABLE_ROLES, ProviderProfile
from ratings.review.review import Review
from ratings.summary.rating_summary import rating_summary_for, summarize
from ratings.utils.queries import fetch_all, paginate

MAX_PAGE_SIZE = 100
TOP_PROVIDERS = 10
RECENT_REVIEWS = 5


def _check_page(page, limit):
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be 1 or greater"]
    if not 1 <= limit <= MAX_PAGE_SIZE:
        errors["limit"] = [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]
    if errors:
        raise ValidationError(errors)


def _reviews():
    return current_domain.repository_for(Review)._dao.query


def _page(items, page, limit, total):
    return {"items": items, "page": page, "limit": limit, "total": total}


def provider_reviews(provider_id, page=1, limit=10):
    """Visible reviews of a provider together with its rating summary."""
    _check_page(page, limit)
    items, total = paginate(
        _reviews().filter(provider_id=str(provider_id), is_visible=True).order_by("-created_at"),
        page,
        limit,
    )
    return {
        "summary": rating_summary_for(provider_id),
        **_page([review.public_snapshot() for review in items], page, limit, total),
    }


def customer_reviews(customer_id, page=1, limit=10):
    _check_page(page, limit)
    items, total = paginate(
        _reviews().filter(customer_id=str(customer_id)).order_by("-created_at"),
        page,
        limit,
    )
    return _page([review.public_snapshot() for review in items], page, limit, total)


def featured_reviews(limit=10):
    """Most recent visible admin-authored reviews."""
    _check_page(1, limit)
    queryset = _reviews().filter(is_admin_created=True, is_visible=True).order_by("-created_at")
    return [review.public_snapshot() for review in queryset.limit(limit).all().items]


def admin_reviews(provider_id=None, rating=None, visible=None, admin_created=None, page=1, limit=20):
    """All reviews matching the filters, with admin-only fields."""
    _check_page(page, limit)

    criteria = {}
    if provider_id is not None:
        criteria["provider_id"] = str(provider_id)
    if visible is not None:
        criteria["is_visible"] = visible
    if admin_created is not None:
        criteria["is_admin_created"] = admin_created
    queryset = _reviews().filter(**criteria).order_by("-created_at")

    if rating is None:
        items, total = paginate(queryset, page, limit)
    else:
        # Rating is embedded as a value object; filter it after loading
        matching = [review for review in fetch_all(queryset) if review.rating.score == rating]
        start = (page - 1) * limit
        items, total = matching[start : start + limit], len(matching)

    return _page([review.snapshot() for review in items], page, limit, total)


def review_stats():
    """Totals across all reviews, for the moderation dashboard."""
    reviews = fetch_all(_reviews().order_by("-created_at"))
    visible = [review for review in reviews if review.is_visible]
    overall = summarize(review.rating.score for review in visible)

    per_provider = {}
    for review in visible:
        per_provider.setdefault(str(review.provider_id), []).append(review.rating.score)
    top = sorted(
        ({"provider_id": provider_id, **summarize(scores)} for provider_id, scores in per_provider.items()),
        key=lambda entry: (-entry["visible_review_count"], -entry["average_rating"]),
    )[:TOP_PROVIDERS]

    return {
        "total": len(reviews),
        "visible": len(visible),
        "hidden": len(reviews) - len(visible),
        "admin_created": sum(1 for review in reviews if review.is_admin_created),
        "average_rating": overall["average_rating"],
        "star_histogram": overall["star_histogram"],
        "top_providers": [
            {
                "provider_id": entry["provider_id"],
                "average_rating": entry["average_rating"],
                "visible_review_count": entry["visible_review_count"],
            }
            for entry in top
        ],
        "recent": [review.snapshot() for review in reviews[:RECENT_REVIEWS]],
    }


def rateable_providers():
    """Active providers that can be rated, with their current rating summary."""
    profiles = fetch_all(current_domain.repository_for(ProviderProfile)._dao.query.filter(is_active=True))
    rateable = sorted(
        (profile for profile in profiles if profile.role in RATEABLE_ROLES),
        key=lambda profile: (profile.first_name, profile.last_name),
    )
    return [
        {
            "provider_id": str(profile.provider_id),
            "first_name": profile.first_name,
            "last_name": profile.last_name,
            "email": profile.email,
            "summary": rating_summary_for(profile.provider_id),
        }
        for profile in rateable
    ]
