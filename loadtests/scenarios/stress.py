"""Stress scenario for per-provider serialization.

ProviderContentionUser makes every user hammer the same provider with
creates and visibility toggles, so all mutations queue on one provider
lock. At the end of the run the locustfile checks that the stored summary
still matches the visible reviews.
"""

import random

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import admin_id, admin_review_data
from loadtests.helpers.state import ModeratorState


class ProviderContentionUser(HttpUser):
    """All users write to the first rateable provider."""

    wait_time = constant_pacing(0.1)  # ~10 requests/sec per user

    def on_start(self):
        self.state = ModeratorState(admin_id=admin_id())
        resp = self.client.get("/admin/providers", headers=self.state.headers, name="GET /admin/providers")
        providers = resp.json() if resp.status_code == 200 else []
        self.provider_id = providers[0]["provider_id"] if providers else None

    @task(3)
    def create_review(self):
        if self.provider_id is None:
            return
        resp = self.client.post(
            "/admin/reviews",
            json=admin_review_data(self.provider_id),
            headers=self.state.headers,
            name="[STRESS] POST /admin/reviews",
        )
        if resp.status_code == 201:
            self.state.review_ids.append(resp.json()["id"])

    @task(2)
    def toggle_review(self):
        if not self.state.review_ids:
            return
        self.client.post(
            f"/reviews/{random.choice(self.state.review_ids)}/toggle-visibility",
            headers=self.state.headers,
            name="[STRESS] POST /reviews/{id}/toggle-visibility",
        )
