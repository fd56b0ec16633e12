"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(rating 1-5, comment at most 500 characters) and match the exact field
names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def admin_id() -> str:
    return f"admin-lt-{uuid.uuid4().hex[:8]}"


def rating() -> int:
    """Skewed towards good ratings, like real review sets."""
    return random.choices([1, 2, 3, 4, 5], weights=[1, 1, 2, 4, 6])[0]


def comment() -> str | None:
    if random.random() < 0.2:
        return None
    return fake.paragraph(nb_sentences=3)[:500]


def display_name() -> str:
    # Small first-name pool so synthetic customers get reused
    return f"{random.choice(['Alex', 'Sam', 'Jordan', 'Robin', 'Kim'])} {fake.last_name()}"


def admin_review_data(provider_id: str) -> dict:
    return {
        "provider_id": provider_id,
        "rating": rating(),
        "comment": comment(),
        "display_name": display_name(),
        "admin_notes": "load test",
    }


def bulk_review_data(provider_id: str, count: int = 5) -> dict:
    return {
        "provider_id": provider_id,
        "entries": [
            {"rating": rating(), "comment": comment(), "display_name": display_name()} for _ in range(count)
        ],
    }
