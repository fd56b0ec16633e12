"""Cross-domain event contracts for Identity domain events.

These classes define the event shape for consumption by other domains
(e.g., the Ratings domain keeps a directory of rateable providers). They
are registered as external events via domain.register_external_event()
with matching __type__ strings so Protean's stream deserialization
works correctly.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, String


class ProviderRegistered(BaseEvent):
    """A user account with a provider-side role was created on the platform."""

    __version__ = 1

    provider_id = Identifier(required=True)
    email = String(required=True)
    first_name = String(required=True)
    last_name = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


class ProviderDeactivated(BaseEvent):
    """A provider account was deactivated; it drops out of provider listings."""

    __version__ = 1

    provider_id = Identifier(required=True)
    reason = String()
    deactivated_at = DateTime(required=True)
