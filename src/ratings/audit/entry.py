"""AuditEntry aggregate — append-only record of an administrative review mutation.

Entries are created once and never changed. ``review_id`` is kept as a plain
identifier (not a reference), so entries outlive the reviews they describe.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from ratings.domain import ratings


class AuditAction(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    TOGGLE_VISIBILITY = "toggle_visibility"


@ratings.aggregate
class AuditEntry:
    review_id = Identifier()
    provider_id = Identifier()
    actor_id = Identifier(required=True)
    action = String(required=True, choices=AuditAction, max_length=30)
    before_state = Text()  # JSON snapshot or null
    after_state = Text()  # JSON snapshot or null
    reason = Text()
    created_at = DateTime(required=True)

    @classmethod
    def capture(cls, action, actor_id, review_id, provider_id=None, before=None, after=None, reason=None):
        return cls(
            review_id=str(review_id) if review_id else None,
            provider_id=str(provider_id) if provider_id else None,
            actor_id=str(actor_id),
            action=AuditAction(action).value,
            before_state=json.dumps(before) if before is not None else None,
            after_state=json.dumps(after) if after is not None else None,
            reason=reason,
            created_at=datetime.now(UTC),
        )

    @property
    def before(self):
        return json.loads(self.before_state) if self.before_state else None

    @property
    def after(self):
        return json.loads(self.after_state) if self.after_state else None

    def to_view(self):
        return {
            "id": str(self.id),
            "review_id": str(self.review_id) if self.review_id else None,
            "provider_id": str(self.provider_id) if self.provider_id else None,
            "actor_id": str(self.actor_id),
            "action": self.action,
            "before_state": self.before,
            "after_state": self.after,
            "reason": self.reason,
            "created_at": self.created_at,
        }
