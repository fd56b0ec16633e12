"""Protean Engine runner for the Ratings domain.

In deployments where the Booking and Identity contexts publish their events
through a broker, the Engine consumes them and keeps the booking and
provider read models current:
- OutboxProcessor: publishes Ratings events from the outbox
- StreamSubscriptions: invokes the ``bookings::booking`` and
  ``identity::provider`` event handlers

Usage:
    python src/server.py
    python src/server.py --test-mode   # process pending messages and exit
"""

import argparse
import asyncio

from protean.server.engine import Engine


async def run(test_mode=False):
    from ratings.domain import ratings

    ratings.init()
    await Engine(ratings, test_mode=test_mode).run()


def main():
    parser = argparse.ArgumentParser(description="Ratings Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process available messages and exit",
    )
    args = parser.parse_args()

    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
