"""Ratings Load Testing — Locust entry point.

Discovers all user classes from the scenarios package. Scenarios need
rateable providers to exist; seed them first with
``python scripts/seed_directory.py``.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Moderation workload only:
    locust -f loadtests/locustfile.py ModeratorUser

    # Same-provider contention:
    locust -f loadtests/locustfile.py ProviderContentionUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py ModeratorUser PublicReaderUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import summary_is_consistent
from loadtests.scenarios.ratings import ModeratorUser, PublicReaderUser  # noqa: F401
from loadtests.scenarios.stress import ProviderContentionUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Fires globally for all scenarios. Extracts the API error body so you see
    "forbidden: Only administrators can change review visibility" instead of
    just "403".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Check every provider's summary against its visible reviews when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    headers = {"X-Actor-Id": "loadtest-auditor", "X-Actor-Role": "admin"}
    try:
        providers = requests.get(f"{environment.host}/admin/providers", headers=headers, timeout=10).json()
        drifted = [
            provider["provider_id"]
            for provider in providers
            if not summary_is_consistent(environment.host, provider["provider_id"], headers)
        ]
        print(f"[LOADTEST] Providers checked: {len(providers)}, summaries out of step: {len(drifted)}")
        for provider_id in drifted:
            print(f"  {provider_id}")
        print()
    except Exception as e:
        print(f"[LOADTEST] Could not verify rating summaries: {e}\n")
