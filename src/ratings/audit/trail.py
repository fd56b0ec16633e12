"""Audit trail — best-effort recording and lookup of admin review mutations.

Recording happens after the review mutation has committed. A failure to
write the entry is logged and swallowed: the caller's review operation has
already succeeded and is reported as such.
"""

import structlog
from protean.utils.globals import current_domain

from ratings.audit.entry import AuditEntry
from ratings.utils.queries import fetch_all

logger = structlog.get_logger(__name__)


def record_admin_action(action, actor_id, review_id, provider_id=None, before=None, after=None, reason=None):
    """Append an audit entry. Returns the entry, or None if it could not be written."""
    try:
        entry = AuditEntry.capture(
            action=action,
            actor_id=actor_id,
            review_id=review_id,
            provider_id=provider_id,
            before=before,
            after=after,
            reason=reason,
        )
        current_domain.repository_for(AuditEntry).add(entry)
    except Exception as exc:
        logger.error(
            "audit_write_failed",
            action=str(action),
            review_id=str(review_id) if review_id else None,
            actor_id=str(actor_id),
            error=str(exc),
        )
        return None

    logger.info("audit_entry_recorded", action=entry.action, review_id=entry.review_id, actor_id=entry.actor_id)
    return entry


def audit_trail_for_review(review_id):
    """Entries for a review, newest first. Works after the review was deleted."""
    repo = current_domain.repository_for(AuditEntry)
    return fetch_all(repo._dao.query.filter(review_id=str(review_id)).order_by("-created_at"))


def audit_trail_for_actor(actor_id):
    repo = current_domain.repository_for(AuditEntry)
    return fetch_all(repo._dao.query.filter(actor_id=str(actor_id)).order_by("-created_at"))
