"""Tests for the visibility state machine and deletion rights."""

import pytest
from ratings.errors import Forbidden
from ratings.review.events import ReviewDeleted, ReviewVisibilityToggled
from ratings.review.review import Review


@pytest.fixture()
def review():
    review = Review.post(
        booking_id="book-001",
        customer_id="cust-001",
        provider_id="prov-001",
        rating=5,
    )
    review._events.clear()
    return review


class TestToggleVisibility:
    def test_visible_to_hidden(self, review):
        assert review.toggle_visibility("admin-001", "admin") is False
        assert review.is_visible is False

    def test_toggle_twice_restores_visibility(self, review):
        review.toggle_visibility("admin-001", "admin")
        assert review.toggle_visibility("admin-001", "admin") is True

    def test_raises_event(self, review):
        review.toggle_visibility("admin-001", "admin")
        event = review._events[0]
        assert isinstance(event, ReviewVisibilityToggled)
        assert event.is_visible is False
        assert event.toggled_by == "admin-001"

    def test_customer_cannot_toggle(self, review):
        with pytest.raises(Forbidden):
            review.toggle_visibility("cust-001", "customer")
        assert review.is_visible is True

    def test_unknown_role_rejected(self, review):
        with pytest.raises(ValueError):
            review.toggle_visibility("someone", "moderator")


class TestDiscard:
    def test_owner_may_delete(self, review):
        review.discard("cust-001", "customer")
        assert isinstance(review._events[0], ReviewDeleted)

    def test_admin_may_delete(self, review):
        review.discard("admin-001", "admin")
        assert review._events[0].deleted_by == "admin-001"

    def test_other_customer_forbidden(self, review):
        with pytest.raises(Forbidden):
            review.discard("cust-002", "customer")
        assert review._events == []
