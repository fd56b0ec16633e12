"""Application tests for review listings, statistics and the provider directory."""

import pytest
from protean.exceptions import ValidationError
from ratings.review import listing
from ratings.workflow import submit_admin_review, submit_organic_review, toggle_visibility


@pytest.fixture()
def populated(record_booking, customer_id, provider_id):
    organic = [
        submit_organic_review(customer_id, record_booking(customer_id, provider_id), rating=rating)
        for rating in (5, 4, 2)
    ]
    admin = [
        submit_admin_review("admin-001", provider_id, rating=3, admin_notes="imported"),
        submit_admin_review("admin-001", provider_id, rating=5, display_name="Ada"),
    ]
    toggle_visibility(organic[2]["id"], "admin-001", "admin")
    return {"organic": organic, "admin": admin}


class TestProviderReviews:
    def test_visible_only_with_summary(self, populated, provider_id):
        result = listing.provider_reviews(provider_id)

        assert result["total"] == 4
        assert result["summary"]["visible_review_count"] == 4
        assert all(item["is_visible"] for item in result["items"])

    def test_admin_notes_never_public(self, populated, provider_id):
        for item in listing.provider_reviews(provider_id)["items"]:
            assert "admin_notes" not in item

    def test_pagination(self, populated, provider_id):
        first = listing.provider_reviews(provider_id, page=1, limit=3)
        second = listing.provider_reviews(provider_id, page=2, limit=3)

        assert len(first["items"]) == 3
        assert len(second["items"]) == 1
        assert {item["id"] for item in first["items"]}.isdisjoint(item["id"] for item in second["items"])

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 101)])
    def test_invalid_paging(self, provider_id, page, limit):
        with pytest.raises(ValidationError):
            listing.provider_reviews(provider_id, page=page, limit=limit)


class TestCustomerReviews:
    def test_includes_hidden_own_reviews(self, populated, customer_id):
        assert listing.customer_reviews(customer_id)["total"] == 3

    def test_other_customer_sees_nothing(self, populated):
        assert listing.customer_reviews("cust-nobody")["items"] == []


class TestFeaturedReviews:
    def test_visible_admin_reviews_only(self, populated):
        featured = listing.featured_reviews()

        assert {item["id"] for item in featured} == {review["id"] for review in populated["admin"]}
        assert all("admin_notes" not in item for item in featured)

    def test_limit(self, populated):
        assert len(listing.featured_reviews(limit=1)) == 1


class TestAdminReviews:
    def test_everything_by_default(self, populated):
        result = listing.admin_reviews()
        assert result["total"] == 5
        assert result["limit"] == 20

    def test_filter_by_visibility(self, populated):
        hidden = listing.admin_reviews(visible=False)
        assert [item["id"] for item in hidden["items"]] == [populated["organic"][2]["id"]]

    def test_filter_by_origin(self, populated):
        assert listing.admin_reviews(admin_created=True)["total"] == 2

    def test_filter_by_rating(self, populated):
        result = listing.admin_reviews(rating=5)
        assert result["total"] == 2
        assert all(item["rating"] == 5 for item in result["items"])

    def test_filter_by_provider(self, populated, register_provider):
        other = register_provider()
        submit_admin_review("admin-001", other, rating=1)
        assert listing.admin_reviews(provider_id=other)["total"] == 1

    def test_includes_admin_fields(self, populated):
        notes = {item["admin_notes"] for item in listing.admin_reviews(admin_created=True)["items"]}
        assert "imported" in notes


class TestReviewStats:
    def test_totals(self, populated, provider_id):
        stats = listing.review_stats()

        assert stats["total"] == 5
        assert stats["visible"] == 4
        assert stats["hidden"] == 1
        assert stats["admin_created"] == 2
        assert stats["average_rating"] == 4.25
        assert stats["star_histogram"] == {1: 0, 2: 0, 3: 1, 4: 1, 5: 2}
        assert stats["top_providers"][0]["provider_id"] == provider_id
        assert len(stats["recent"]) == 5

    def test_empty_store(self):
        stats = listing.review_stats()
        assert stats["total"] == 0
        assert stats["average_rating"] == 0.0
        assert stats["top_providers"] == []


class TestRateableProviders:
    def test_sorted_with_summaries(self, register_provider):
        zoe = register_provider(first_name="Zoe", last_name="Adams")
        register_provider(first_name="Adam", last_name="Young")
        register_provider(first_name="Boss", last_name="Person", role="admin")
        submit_admin_review("admin-001", zoe, rating=4)

        providers = listing.rateable_providers()

        assert [provider["first_name"] for provider in providers] == ["Adam", "Zoe"]
        assert providers[1]["summary"]["average_rating"] == 4.0
        assert providers[0]["summary"]["visible_review_count"] == 0
