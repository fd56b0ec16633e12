"""Application tests for the booking and provider read models."""

from datetime import UTC, datetime

from protean import current_domain
from ratings.directory.bookings import BookingEventsHandler, BookingRecord, get_booking
from ratings.directory.providers import ProviderEventsHandler, ProviderProfile, get_rateable_provider
from shared.events.bookings import BookingStatusChanged, ProviderAssigned
from shared.events.identity import ProviderDeactivated


class TestBookingEventsHandler:
    def test_status_change_creates_record(self):
        BookingEventsHandler().on_booking_status_changed(
            BookingStatusChanged(
                booking_id="book-h1",
                customer_id="cust-h1",
                status="Confirmed",
                changed_at=datetime.now(UTC),
            )
        )

        record = get_booking("book-h1")
        assert record.status == "confirmed"
        assert record.provider_id is None

    def test_provider_assignment_then_completion(self):
        handler = BookingEventsHandler()
        handler.on_provider_assigned(
            ProviderAssigned(
                booking_id="book-h2",
                customer_id="cust-h2",
                provider_id="prov-h2",
                assigned_at=datetime.now(UTC),
            )
        )
        handler.on_booking_status_changed(
            BookingStatusChanged(
                booking_id="book-h2",
                customer_id="cust-h2",
                status="completed",
                changed_at=datetime.now(UTC),
            )
        )

        record = current_domain.repository_for(BookingRecord).get("book-h2")
        assert record.status == "completed"
        assert str(record.provider_id) == "prov-h2"

    def test_unknown_booking(self):
        assert get_booking("book-missing") is None


class TestProviderEventsHandler:
    def test_registration(self, register_provider):
        provider_id = register_provider(first_name="Ines", last_name="Berg")

        profile = current_domain.repository_for(ProviderProfile).get(provider_id)
        assert profile.first_name == "Ines"
        assert profile.is_active is True
        assert get_rateable_provider(provider_id) is not None

    def test_non_rateable_role(self, register_provider):
        assert get_rateable_provider(register_provider(role="admin")) is None

    def test_deactivation(self, register_provider):
        provider_id = register_provider()
        ProviderEventsHandler().on_provider_deactivated(
            ProviderDeactivated(provider_id=provider_id, reason="left", deactivated_at=datetime.now(UTC))
        )

        assert current_domain.repository_for(ProviderProfile).get(provider_id).is_active is False

    def test_deactivation_of_unknown_provider_is_ignored(self):
        ProviderEventsHandler().on_provider_deactivated(
            ProviderDeactivated(provider_id="prov-missing", deactivated_at=datetime.now(UTC))
        )
        assert get_rateable_provider("prov-missing") is None
