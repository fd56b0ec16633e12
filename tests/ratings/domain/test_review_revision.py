"""Tests for Review.revise — who may change which fields."""

import pytest
from protean.exceptions import ValidationError
from ratings.errors import Forbidden
from ratings.review.events import ReviewRevised
from ratings.review.review import Review


@pytest.fixture()
def organic():
    review = Review.post(
        booking_id="book-001",
        customer_id="cust-001",
        provider_id="prov-001",
        rating=4,
        comment="Good job",
    )
    review._events.clear()
    return review


@pytest.fixture()
def authored():
    review = Review.author(provider_id="prov-001", admin_id="admin-001", rating=3, comment="Fine")
    review._events.clear()
    return review


class TestCustomerRevision:
    def test_owner_changes_rating_and_comment(self, organic):
        changed = organic.revise("cust-001", "customer", rating=2, comment="Missed the windows")
        assert changed == {"rating", "comment"}
        assert organic.rating.score == 2
        assert organic.comment == "Missed the windows"

    def test_owner_clears_comment(self, organic):
        assert organic.revise("cust-001", "customer", comment=None) == {"comment"}
        assert organic.comment is None

    def test_other_customer_forbidden(self, organic):
        with pytest.raises(Forbidden):
            organic.revise("cust-999", "customer", rating=1)
        assert organic.rating.score == 4

    @pytest.mark.parametrize("field", ["is_visible", "admin_notes"])
    def test_owner_cannot_touch_moderation_fields(self, organic, field):
        with pytest.raises(Forbidden):
            organic.revise("cust-001", "customer", **{field: False if field == "is_visible" else "x"})

    def test_customer_cannot_edit_admin_review(self, authored):
        with pytest.raises(Forbidden):
            authored.revise("cust-001", "customer", rating=5)


class TestAdminRevision:
    def test_admin_moderates_organic_visibility(self, organic):
        assert organic.revise("admin-001", "admin", is_visible=False) == {"is_visible"}
        assert organic.is_visible is False

    @pytest.mark.parametrize("field,value", [("rating", 1), ("comment", "edited"), ("admin_notes", "note")])
    def test_admin_cannot_rewrite_customer_content(self, organic, field, value):
        with pytest.raises(Forbidden) as exc:
            organic.revise("admin-001", "admin", **{field: value})
        assert field in exc.value.message
        assert organic.rating.score == 4
        assert organic.comment == "Good job"

    def test_admin_edits_any_field_of_admin_review(self, authored):
        changed = authored.revise(
            "admin-002",
            "admin",
            rating=5,
            comment="Great",
            admin_notes="from survey",
            is_visible=False,
        )
        assert changed == {"rating", "comment", "admin_notes", "is_visible"}
        assert authored.rating.score == 5
        assert authored.is_visible is False


class TestRevisionOutcome:
    def test_empty_patch_rejected(self, organic):
        with pytest.raises(ValidationError) as exc:
            organic.revise("cust-001", "customer")
        assert "No changes supplied" in str(exc.value)

    def test_unchanged_values_raise_no_event(self, organic):
        assert organic.revise("cust-001", "customer", rating=4) == set()
        assert organic._events == []

    def test_change_raises_review_revised(self, organic):
        organic.revise("cust-001", "customer", rating=5)
        event = organic._events[0]
        assert isinstance(event, ReviewRevised)
        assert event.changed_fields == "rating"
        assert event.rating == 5

    def test_invalid_rating_rejected(self, organic):
        with pytest.raises(ValidationError):
            organic.revise("cust-001", "customer", rating=0)

    def test_updated_at_moves_forward(self, organic):
        before = organic.updated_at
        organic.revise("cust-001", "customer", comment="Changed")
        assert organic.updated_at >= before
