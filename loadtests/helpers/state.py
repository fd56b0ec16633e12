"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across users.
State tracks review IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field

import requests


@dataclass
class ModeratorState:
    """Reviews a simulated administrator has written and not yet deleted."""

    admin_id: str
    provider_ids: list[str] = field(default_factory=list)
    review_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"X-Actor-Id": self.admin_id, "X-Actor-Role": "admin"}


def summary_is_consistent(host: str, provider_id: str, headers: dict) -> bool:
    """Compare a provider's stored summary with its visible reviews."""
    summary = requests.get(f"{host}/providers/{provider_id}/rating-summary", timeout=10).json()
    ratings = []
    page = 1
    while True:
        body = requests.get(
            f"{host}/admin/reviews",
            params={"provider_id": provider_id, "visible": "true", "page": page, "limit": 100},
            headers=headers,
            timeout=10,
        ).json()
        ratings.extend(item["rating"] for item in body["items"])
        if page * 100 >= body["total"]:
            break
        page += 1

    expected = round(sum(ratings) / len(ratings), 2) if ratings else 0.0
    return summary["visible_review_count"] == len(ratings) and summary["average_rating"] == expected
