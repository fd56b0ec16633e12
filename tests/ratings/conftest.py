import uuid
from datetime import UTC, datetime

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ratings_bed():
    from ratings.domain import ratings

    bed = DomainFixture(ratings)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ratings_bed):
    with ratings_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


def unique_id(prefix):
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


@pytest.fixture()
def register_provider():
    """Add a provider to the directory the way Identity events do."""
    from ratings.directory.providers import ProviderEventsHandler
    from shared.events.identity import ProviderRegistered

    def _register(first_name="Maria", last_name="Lopez", role="cleaner", provider_id=None):
        provider_id = provider_id or unique_id("prov")
        ProviderEventsHandler().on_provider_registered(
            ProviderRegistered(
                provider_id=provider_id,
                email=f"{provider_id}@example.com",
                first_name=first_name,
                last_name=last_name,
                role=role,
                registered_at=datetime.now(UTC),
            )
        )
        return provider_id

    return _register


@pytest.fixture()
def record_booking():
    """Add a booking to the read model the way Booking events do."""
    from ratings.directory.bookings import BookingEventsHandler
    from shared.events.bookings import BookingStatusChanged

    def _record(customer_id, provider_id=None, status="completed", booking_id=None):
        booking_id = booking_id or unique_id("book")
        BookingEventsHandler().on_booking_status_changed(
            BookingStatusChanged(
                booking_id=booking_id,
                customer_id=customer_id,
                provider_id=provider_id,
                status=status,
                changed_at=datetime.now(UTC),
            )
        )
        return booking_id

    return _record


@pytest.fixture()
def provider_id(register_provider):
    return register_provider()


@pytest.fixture()
def customer_id():
    return unique_id("cust")


@pytest.fixture()
def booking_id(record_booking, customer_id, provider_id):
    """A completed booking of ``customer_id`` served by ``provider_id``."""
    return record_booking(customer_id, provider_id)
