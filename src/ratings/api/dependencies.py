"""Request-scoped dependencies: who is calling.

Authentication happens upstream; it forwards the caller's identity and role
in the ``X-Actor-Id`` and ``X-Actor-Role`` headers.
"""

from dataclasses import dataclass

from fastapi import Depends, Header

from ratings.errors import Forbidden
from ratings.review.review import ActorRole
from ratings.utils.logging import add_context


@dataclass(frozen=True)
class Actor:
    actor_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN.value


def current_actor(x_actor_id: str = Header(), x_actor_role: str = Header()) -> Actor:
    role = x_actor_role.lower()
    if role not in {r.value for r in ActorRole}:
        raise Forbidden(f"Unknown actor role: {x_actor_role}")

    add_context(actor_id=x_actor_id, actor_role=role)
    return Actor(actor_id=x_actor_id, role=role)


def admin_actor(actor: Actor = Depends(current_actor)) -> Actor:
    if not actor.is_admin:
        raise Forbidden("Administrator role required")
    return actor
