"""Shared BDD fixtures and step definitions for the Ratings domain."""

import pytest
from pytest_bdd import given, parsers, then
from ratings.audit.trail import audit_trail_for_review
from ratings.errors import Forbidden
from ratings.summary.rating_summary import rating_summary_for
from ratings.workflow import submit_admin_review, submit_organic_review


@pytest.fixture()
def context():
    """Per-scenario state shared between steps."""
    return {"reviews": {}, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a rateable provider")
def rateable_provider(context, register_provider):
    context["provider_id"] = register_provider()


@given(parsers.cfparse('a completed booking for customer "{customer_id}" with that provider'))
def completed_booking(context, record_booking, customer_id):
    context["booking_id"] = record_booking(customer_id, context["provider_id"])


@given(parsers.cfparse('customer "{customer_id}" reviewed the booking with rating {rating:d}'))
def customer_reviewed(context, customer_id, rating):
    review = submit_organic_review(customer_id, context["booking_id"], rating=rating)
    context["reviews"][rating] = review


@given(parsers.cfparse("an administrator wrote a review with rating {rating:d}"))
def admin_wrote(context, rating):
    review = submit_admin_review("admin-bdd", context["provider_id"], rating=rating)
    context["reviews"][rating] = review


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.re(r"the provider's average rating is (?P<average>[\d.]+) from (?P<count>\d+) reviews?"))
def provider_average(context, average, count):
    summary = rating_summary_for(context["provider_id"])
    assert summary["average_rating"] == float(average)
    assert summary["visible_review_count"] == int(count)
    assert sum(summary["star_histogram"].values()) == int(count)


@then(parsers.cfparse('the audit trail of the rating {rating:d} review starts with "{action}"'))
def audit_starts_with(context, rating, action):
    entries = audit_trail_for_review(context["reviews"][rating]["id"])
    assert entries[0].action == action


@then("the action is forbidden")
def action_forbidden(context):
    assert isinstance(context["error"], Forbidden)
