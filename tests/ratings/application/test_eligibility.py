"""Application tests for can_review."""

import pytest
from protean import current_domain
from ratings.eligibility import can_review
from ratings.errors import NotFound
from ratings.summary.rating_summary import RatingSummary
from ratings.workflow import submit_organic_review


class TestCanReview:
    def test_fresh_completed_booking_is_eligible(self, booking_id, customer_id):
        assert can_review(customer_id, booking_id) == {"eligible": True, "reason": None}

    def test_confirmed_booking_not_completed(self, record_booking, customer_id, provider_id):
        booking_id = record_booking(customer_id, provider_id, status="confirmed")
        assert can_review(customer_id, booking_id) == {"eligible": False, "reason": "not_completed"}

    def test_no_provider_assigned(self, record_booking, customer_id):
        booking_id = record_booking(customer_id, provider_id=None)
        assert can_review(customer_id, booking_id) == {"eligible": False, "reason": "no_provider_assigned"}

    def test_already_reviewed(self, booking_id, customer_id):
        submit_organic_review(customer_id, booking_id, rating=5)
        assert can_review(customer_id, booking_id) == {"eligible": False, "reason": "already_reviewed"}

    def test_unknown_booking(self, customer_id):
        with pytest.raises(NotFound):
            can_review(customer_id, "book-missing")

    def test_someone_elses_booking(self, booking_id):
        with pytest.raises(NotFound):
            can_review("cust-intruder", booking_id)

    def test_is_a_pure_read(self, booking_id, customer_id, provider_id):
        can_review(customer_id, booking_id)
        assert current_domain.repository_for(RatingSummary)._dao.query.all().total == 0
