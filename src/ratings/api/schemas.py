"""Pydantic request/response schemas for the Ratings API.

These are separate from Protean commands (anti-corruption pattern).
Field ranges (rating 1-5, comment length) are enforced by the domain so that
every rule has one home and one error message.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PostReviewRequest(BaseModel):
    booking_id: str
    rating: int
    comment: str | None = None


class AdminReviewRequest(BaseModel):
    provider_id: str
    rating: int
    comment: str | None = None
    display_name: str | None = None
    admin_notes: str | None = None
    is_verified: bool = True


class BulkReviewEntry(BaseModel):
    rating: int
    comment: str | None = None
    display_name: str | None = None
    admin_notes: str | None = None
    is_verified: bool = True


class BulkAdminReviewRequest(BaseModel):
    provider_id: str
    entries: list[BulkReviewEntry]


class UpdateReviewRequest(BaseModel):
    """Partial update; only the fields present in the body are applied."""

    rating: int | None = None
    comment: str | None = None
    admin_notes: str | None = None
    is_visible: bool | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PublicReviewResponse(BaseModel):
    id: str
    booking_id: str | None = None
    customer_id: str | None = None
    provider_id: str
    rating: int
    comment: str | None = None
    is_admin_created: bool
    is_visible: bool
    is_verified: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewResponse(PublicReviewResponse):
    admin_created_by: str | None = None
    admin_notes: str | None = None


class BulkReviewsResponse(BaseModel):
    reviews: list[ReviewResponse]


class RatingSummaryResponse(BaseModel):
    provider_id: str
    average_rating: float
    visible_review_count: int
    star_histogram: dict[int, int]


class EligibilityResponse(BaseModel):
    eligible: bool
    reason: str | None = None


class VisibilityResponse(BaseModel):
    review_id: str
    is_visible: bool


class PublicReviewPage(BaseModel):
    items: list[PublicReviewResponse]
    page: int
    limit: int
    total: int


class ProviderReviewsResponse(PublicReviewPage):
    summary: RatingSummaryResponse


class AdminReviewPage(BaseModel):
    items: list[ReviewResponse]
    page: int
    limit: int
    total: int


class ProviderRatingResponse(BaseModel):
    provider_id: str
    average_rating: float
    visible_review_count: int


class ReviewStatsResponse(BaseModel):
    total: int
    visible: int
    hidden: int
    admin_created: int
    average_rating: float
    star_histogram: dict[int, int]
    top_providers: list[ProviderRatingResponse] = Field(default_factory=list)
    recent: list[ReviewResponse] = Field(default_factory=list)


class AuditEntryResponse(BaseModel):
    id: str
    review_id: str | None = None
    provider_id: str | None = None
    actor_id: str
    action: str
    before_state: dict | None = None
    after_state: dict | None = None
    reason: str | None = None
    created_at: datetime


class RateableProviderResponse(BaseModel):
    provider_id: str
    first_name: str
    last_name: str
    email: str | None = None
    summary: RatingSummaryResponse


class StatusResponse(BaseModel):
    status: str = "ok"
