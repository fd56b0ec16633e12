"""Response error extraction for load test observability.

Parses Ratings API error responses into human-readable messages. Every
error body has the shape ``{"kind": ..., "message": ...}`` with an optional
``"reason"`` (not_eligible) or ``"details"`` (validation errors).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON; return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict) or "kind" not in body:
        return str(body)[:300]

    detail = f"{body['kind']}: {body.get('message', '')}"
    if body.get("reason"):
        detail += f" ({body['reason']})"

    details = body.get("details")
    if isinstance(details, dict):
        detail += " | " + " | ".join(f"{k}: {v}" for k, v in details.items())
    elif isinstance(details, list):
        # Request-schema errors: [{"loc": [...], "msg": "..."}]
        parts = []
        for err in details:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        detail += " | " + " | ".join(parts)
    return detail
