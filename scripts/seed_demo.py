#!/usr/bin/env python3
"""
Seed a demo event with RSVP and ticket attendees.

Creates an owner, a mixed RSVP/ticketed event and a handful of attendees so
the check-in page has something to show.

Usage:
    python scripts/seed_demo.py
    python scripts/seed_demo.py --rsvps 20 --tickets 30
"""
import argparse
import os
import sys
from datetime import UTC, datetime, timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlmodel import Session

from checkin.core.database import create_db_and_tables, engine
from checkin.models import Event, OrderAttendee, RsvpSubmission, User


def main():
    parser = argparse.ArgumentParser(description="Seed a demo check-in event")
    parser.add_argument("--rsvps", type=int, default=5, help="Number of RSVP attendees")
    parser.add_argument("--tickets", type=int, default=5, help="Number of ticket holders")
    args = parser.parse_args()

    create_db_and_tables()

    with Session(engine) as session:
        owner = User(name="Demo Organiser", email=f"organiser+{int(datetime.now(UTC).timestamp())}@example.com")
        session.add(owner)
        session.flush()

        event = Event(
            title="Demo Meetup",
            owner_id=owner.id,
            start_time=datetime.now(UTC) + timedelta(days=1),
            rsvp_enabled=True,
            ticketing_enabled=True,
        )
        session.add(event)
        session.flush()

        for n in range(1, args.rsvps + 1):
            session.add(RsvpSubmission(
                event_id=event.id,
                attendee_name=f"RSVP Guest {n}",
                email=f"rsvp{n}@example.com",
            ))
        for n in range(1, args.tickets + 1):
            session.add(OrderAttendee(
                event_id=event.id,
                name=f"Ticket Holder {n}",
                email=f"ticket{n}@example.com",
                ticket_code=f"DEMO-{n:04d}",
            ))

        session.commit()
        print(f"Created event {event.id} owned by user {owner.id}")
        print(f"Open /events/{event.id}/check-in with header X-User-Id: {owner.id}")


if __name__ == "__main__":
    main()
