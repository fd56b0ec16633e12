"""Ratings load test scenarios.

ModeratorUser runs an administrator's journey: write reviews, hide and show
them, edit and delete them. PublicReaderUser reads summaries and listings
the way provider profile pages do.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import admin_id, admin_review_data, bulk_review_data, rating
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ModeratorState


def _load_provider_ids(client, headers):
    resp = client.get("/admin/providers", headers=headers, name="GET /admin/providers")
    if resp.status_code != 200:
        return []
    return [provider["provider_id"] for provider in resp.json()]


class ModerationJourney(SequentialTaskSet):
    """Author -> Bulk author -> Toggle -> Update -> Toggle back -> Delete."""

    def on_start(self):
        self.state = ModeratorState(admin_id=admin_id())
        self.state.provider_ids = _load_provider_ids(self.client, self.state.headers)
        if not self.state.provider_ids:
            self.interrupt()

    @task
    def author_review(self):
        provider_id = random.choice(self.state.provider_ids)
        with self.client.post(
            "/admin/reviews",
            json=admin_review_data(provider_id),
            headers=self.state.headers,
            catch_response=True,
            name="POST /admin/reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Admin review failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def bulk_author(self):
        provider_id = random.choice(self.state.provider_ids)
        with self.client.post(
            "/admin/reviews/bulk",
            json=bulk_review_data(provider_id),
            headers=self.state.headers,
            catch_response=True,
            name="POST /admin/reviews/bulk",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_ids.extend(review["id"] for review in resp.json()["reviews"])
            else:
                resp.failure(f"Bulk authoring failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def hide_review(self):
        self._toggle(self.state.review_ids[0])

    @task
    def update_review(self):
        with self.client.patch(
            f"/reviews/{self.state.review_ids[0]}",
            json={"rating": rating(), "admin_notes": "adjusted during load test"},
            headers=self.state.headers,
            catch_response=True,
            name="PATCH /reviews/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def show_review(self):
        self._toggle(self.state.review_ids[0])

    @task
    def delete_review(self):
        review_id = self.state.review_ids.pop(0)
        with self.client.delete(
            f"/reviews/{review_id}",
            headers=self.state.headers,
            catch_response=True,
            name="DELETE /reviews/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete failed: {resp.status_code} — {extract_error_detail(resp)}")

    def _toggle(self, review_id):
        with self.client.post(
            f"/reviews/{review_id}/toggle-visibility",
            headers=self.state.headers,
            catch_response=True,
            name="POST /reviews/{id}/toggle-visibility",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Toggle failed: {resp.status_code} — {extract_error_detail(resp)}")


class ModeratorUser(HttpUser):
    tasks = [ModerationJourney]
    wait_time = between(0.5, 2)


class PublicReaderUser(HttpUser):
    """Reads what a provider profile page shows."""

    wait_time = between(0.2, 1)

    def on_start(self):
        self.provider_ids = _load_provider_ids(
            self.client, {"X-Actor-Id": "loadtest-reader", "X-Actor-Role": "admin"}
        )

    @task(5)
    def rating_summary(self):
        if self.provider_ids:
            self.client.get(
                f"/providers/{random.choice(self.provider_ids)}/rating-summary",
                name="GET /providers/{id}/rating-summary",
            )

    @task(3)
    def provider_reviews(self):
        if self.provider_ids:
            self.client.get(
                f"/providers/{random.choice(self.provider_ids)}/reviews",
                params={"limit": 10},
                name="GET /providers/{id}/reviews",
            )

    @task(1)
    def featured(self):
        self.client.get("/reviews/featured", name="GET /reviews/featured")
