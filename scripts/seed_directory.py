"""Seed the Ratings read models with providers and completed bookings.

Replays Identity and Booking events through the Ratings event handlers, the
same path the Engine takes when those events arrive from a broker. Useful
for local demos and as a starting point for load tests.

Prerequisites:
    A persistent database (PROTEAN_ENV=production with DATABASE_URL set)
    and its schema: python src/manage.py setup-db

Usage:
    python scripts/seed_directory.py --providers 20 --bookings 200
    python scripts/seed_directory.py --providers 5 --bookings 50 --customer cust-demo
"""

import argparse
import random
import sys
import uuid
from datetime import UTC, datetime

# Add src/ to path so we can import domain modules
sys.path.insert(0, "src")

FIRST_NAMES = ["Ana", "Ben", "Chloe", "Dmitri", "Esra", "Femi", "Greta", "Hiro", "Ines", "Jonas"]
LAST_NAMES = ["Silva", "Okafor", "Nguyen", "Berg", "Haddad", "Kowalski", "Tanaka", "Moreau"]


def _provider_event(provider_id):
    from shared.events.identity import ProviderRegistered

    first_name = random.choice(FIRST_NAMES)
    last_name = random.choice(LAST_NAMES)
    return ProviderRegistered(
        provider_id=provider_id,
        email=f"{first_name.lower()}.{provider_id[:8]}@example.com",
        first_name=first_name,
        last_name=last_name,
        role="cleaner",
        registered_at=datetime.now(UTC),
    )


def _completed_booking_event(booking_id, customer_id, provider_id):
    from shared.events.bookings import BookingStatusChanged

    return BookingStatusChanged(
        booking_id=booking_id,
        customer_id=customer_id,
        provider_id=provider_id,
        status="completed",
        changed_at=datetime.now(UTC),
    )


def main():
    parser = argparse.ArgumentParser(description="Seed providers and completed bookings")
    parser.add_argument("--providers", type=int, default=10, help="Number of providers (default: 10)")
    parser.add_argument("--bookings", type=int, default=100, help="Number of completed bookings (default: 100)")
    parser.add_argument("--customer", help="Attribute every booking to this customer id")
    args = parser.parse_args()

    from ratings.directory.bookings import BookingEventsHandler
    from ratings.directory.providers import ProviderEventsHandler
    from ratings.domain import ratings

    ratings.init()

    with ratings.domain_context():
        provider_handler = ProviderEventsHandler()
        provider_ids = [str(uuid.uuid4()) for _ in range(args.providers)]
        for provider_id in provider_ids:
            provider_handler.on_provider_registered(_provider_event(provider_id))

        booking_handler = BookingEventsHandler()
        for _ in range(args.bookings):
            booking_handler.on_booking_status_changed(
                _completed_booking_event(
                    booking_id=str(uuid.uuid4()),
                    customer_id=args.customer or str(uuid.uuid4()),
                    provider_id=random.choice(provider_ids),
                )
            )

    print(f"Seeded {args.providers:,} providers and {args.bookings:,} completed bookings.")


if __name__ == "__main__":
    main()
