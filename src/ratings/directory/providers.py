"""ProviderProfile — directory of users who can be rated.

Populated from Identity domain events. Admin-authored reviews may only
target a provider of a rateable role. Deactivated providers keep their
reviews but are left out of the rateable-provider listing.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.identity import ProviderDeactivated, ProviderRegistered

from ratings.domain import ratings
from ratings.review.review import Review

logger = structlog.get_logger(__name__)

ratings.register_external_event(ProviderRegistered, "Identity.ProviderRegistered.v1")
ratings.register_external_event(ProviderDeactivated, "Identity.ProviderDeactivated.v1")

RATEABLE_ROLES = frozenset({"cleaner"})


@ratings.projection
class ProviderProfile:
    provider_id = Identifier(identifier=True, required=True)
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    email = String(max_length=254)
    role = String(required=True, max_length=30)
    is_active = Boolean(default=True)
    registered_at = DateTime()


def get_rateable_provider(provider_id):
    """Return the profile if ``provider_id`` names a provider that can be rated."""
    try:
        profile = current_domain.repository_for(ProviderProfile).get(provider_id)
    except ObjectNotFoundError:
        return None
    if profile.role not in RATEABLE_ROLES:
        return None
    return profile


@ratings.event_handler(part_of=Review, stream_category="identity::provider")
class ProviderEventsHandler:
    """Maintains the provider directory from Identity events."""

    @handle(ProviderRegistered)
    def on_provider_registered(self, event: ProviderRegistered) -> None:
        current_domain.repository_for(ProviderProfile).add(
            ProviderProfile(
                provider_id=str(event.provider_id),
                first_name=event.first_name,
                last_name=event.last_name,
                email=event.email,
                role=str(event.role).lower(),
                is_active=True,
                registered_at=event.registered_at,
            )
        )
        logger.info("provider_profile_updated", provider_id=str(event.provider_id), role=event.role)

    @handle(ProviderDeactivated)
    def on_provider_deactivated(self, event: ProviderDeactivated) -> None:
        repo = current_domain.repository_for(ProviderProfile)
        try:
            profile = repo.get(str(event.provider_id))
        except ObjectNotFoundError:
            logger.info("provider_deactivated_unknown", provider_id=str(event.provider_id))
            return

        profile.is_active = False
        repo.add(profile)
        logger.info("provider_profile_updated", provider_id=str(event.provider_id), is_active=False)
