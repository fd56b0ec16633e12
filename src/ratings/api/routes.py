"""FastAPI routes for the Ratings bounded context.

Routes translate between Pydantic schemas (external contract) and the
review workflow. The caller's identity comes from ``current_actor``.
"""

from fastapi import APIRouter, Depends, Query

from ratings.api.dependencies import Actor, admin_actor, current_actor
from ratings.api.schemas import (
    AdminReviewPage,
    AdminReviewRequest,
    AuditEntryResponse,
    BulkAdminReviewRequest,
    BulkReviewsResponse,
    EligibilityResponse,
    PostReviewRequest,
    ProviderReviewsResponse,
    PublicReviewPage,
    PublicReviewResponse,
    RateableProviderResponse,
    RatingSummaryResponse,
    ReviewResponse,
    ReviewStatsResponse,
    StatusResponse,
    UpdateReviewRequest,
    VisibilityResponse,
)
from ratings.audit.trail import audit_trail_for_actor, audit_trail_for_review
from ratings.eligibility import can_review
from ratings.review import listing
from ratings.summary.rating_summary import rating_summary_for
from ratings.workflow import (
    delete_review,
    submit_admin_review,
    submit_admin_reviews_in_bulk,
    submit_organic_review,
    toggle_visibility,
    update_review,
)

review_router = APIRouter(prefix="/reviews", tags=["reviews"])
provider_router = APIRouter(prefix="/providers", tags=["providers"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=PublicReviewResponse)
async def post_review(body: PostReviewRequest, actor: Actor = Depends(current_actor)):
    """Review a completed booking."""
    return submit_organic_review(
        customer_id=actor.actor_id,
        booking_id=body.booking_id,
        rating=body.rating,
        comment=body.comment,
    )


@review_router.get("/mine", response_model=PublicReviewPage)
async def my_reviews(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    actor: Actor = Depends(current_actor),
):
    return listing.customer_reviews(actor.actor_id, page=page, limit=limit)


@review_router.get("/featured", response_model=list[PublicReviewResponse])
async def featured_reviews(limit: int = Query(default=10, ge=1, le=100)):
    return listing.featured_reviews(limit=limit)


@review_router.get("/can-review/{booking_id}", response_model=EligibilityResponse)
async def check_eligibility(booking_id: str, actor: Actor = Depends(current_actor)):
    """Can the caller review this booking right now?"""
    return can_review(actor.actor_id, booking_id)


@review_router.patch("/{review_id}", response_model=ReviewResponse)
async def patch_review(review_id: str, body: UpdateReviewRequest, actor: Actor = Depends(current_actor)):
    updated = update_review(review_id, actor.actor_id, actor.role, body.model_dump(exclude_unset=True))
    if not actor.is_admin:
        # Customers never see moderation metadata
        updated = {**updated, "admin_notes": None, "admin_created_by": None}
    return updated


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def remove_review(review_id: str, reason: str | None = None, actor: Actor = Depends(current_actor)):
    delete_review(review_id, actor.actor_id, actor.role, reason=reason)
    return StatusResponse(status="deleted")


@review_router.post("/{review_id}/toggle-visibility", response_model=VisibilityResponse)
async def toggle_review_visibility(review_id: str, actor: Actor = Depends(current_actor)):
    """Show or hide a review. Administrators only."""
    is_visible = toggle_visibility(review_id, actor.actor_id, actor.role)
    return VisibilityResponse(review_id=review_id, is_visible=is_visible)


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------
@provider_router.get("/{provider_id}/rating-summary", response_model=RatingSummaryResponse)
async def provider_rating_summary(provider_id: str):
    return rating_summary_for(provider_id)


@provider_router.get("/{provider_id}/reviews", response_model=ProviderReviewsResponse)
async def provider_reviews(
    provider_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
):
    return listing.provider_reviews(provider_id, page=page, limit=limit)


# ---------------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------------
@admin_router.post("/reviews", status_code=201, response_model=ReviewResponse)
async def create_admin_review(body: AdminReviewRequest, actor: Actor = Depends(admin_actor)):
    """Write a review for a provider directly."""
    return submit_admin_review(
        admin_id=actor.actor_id,
        provider_id=body.provider_id,
        rating=body.rating,
        comment=body.comment,
        display_name=body.display_name,
        admin_notes=body.admin_notes,
        is_verified=body.is_verified,
    )


@admin_router.post("/reviews/bulk", status_code=201, response_model=BulkReviewsResponse)
async def create_admin_reviews_in_bulk(body: BulkAdminReviewRequest, actor: Actor = Depends(admin_actor)):
    created = submit_admin_reviews_in_bulk(
        admin_id=actor.actor_id,
        provider_id=body.provider_id,
        entries=[entry.model_dump() for entry in body.entries],
    )
    return BulkReviewsResponse(reviews=created)


@admin_router.get("/reviews", response_model=AdminReviewPage)
async def list_reviews(
    provider_id: str | None = None,
    rating: int | None = Query(default=None, ge=1, le=5),
    visible: bool | None = None,
    admin_created: bool | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    actor: Actor = Depends(admin_actor),
):
    return listing.admin_reviews(
        provider_id=provider_id,
        rating=rating,
        visible=visible,
        admin_created=admin_created,
        page=page,
        limit=limit,
    )


@admin_router.get("/reviews/stats", response_model=ReviewStatsResponse)
async def review_stats(actor: Actor = Depends(admin_actor)):
    return listing.review_stats()


@admin_router.get("/reviews/{review_id}/audit", response_model=list[AuditEntryResponse])
async def review_audit_trail(review_id: str, actor: Actor = Depends(admin_actor)):
    """Audit entries for a review, newest first; available after deletion."""
    return [entry.to_view() for entry in audit_trail_for_review(review_id)]


@admin_router.get("/audit", response_model=list[AuditEntryResponse])
async def actor_audit_trail(actor_id: str, actor: Actor = Depends(admin_actor)):
    return [entry.to_view() for entry in audit_trail_for_actor(actor_id)]


@admin_router.get("/providers", response_model=list[RateableProviderResponse])
async def list_rateable_providers(actor: Actor = Depends(admin_actor)):
    return listing.rateable_providers()
