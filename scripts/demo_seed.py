#!/usr/bin/env python3
"""
Demo Seed Script for the Canoe Rental Manager

Creates realistic demo data for demonstrating the rental system:
- ~40 client names reused across bookings (autocomplete ranking)
- Reservations over the past 14 days (completed / a few canceled)
- Today's board: groups on the water, pending arrivals, late ones
- Bookings for the coming 7 days

Reservations go through the model layer, so every row obeys the same
validation and history rules as the API.

Usage: python scripts/demo_seed.py [--keep]
"""

import os
import random
import sys
from datetime import datetime, timedelta

# Add the project root to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from database import get_db, is_initialized, init_db
from models.reservation import (
    create_reservation, mark_on_water, mark_completed, cancel_reservation,
    check_overbooking, suggest_canoe_allocation
)
from utils.datetime_helpers import get_local_now


FIRST_NAMES = [
    'Camille', 'Lucas', 'Emma', 'Hugo', 'Chloe', 'Louis', 'Lea', 'Jules',
    'Manon', 'Arthur', 'Ines', 'Nathan', 'Sarah', 'Tom', 'Julie', 'Paul',
    'Anna', 'Victor', 'Clara', 'Theo',
]
LAST_NAMES = ['Martin', 'Bernard', 'Dubois', 'Moreau', 'Laurent', 'Garcia', 'Roux', 'Fournier']

SLOT_ARRIVALS = {
    'morning': ['09:00', '09:15', '09:30', '10:00', '10:30', '11:00'],
    'afternoon': ['14:00', '14:15', '14:30', '15:00', '15:30', '16:00'],
    'full_day': ['09:00', '09:30', '10:00'],
}


def clear_demo_data(db):
    """Remove reservations, their history and client names."""
    print("🧹 Clearing existing reservations...")
    db.execute('DELETE FROM reservation_history')
    db.execute('DELETE FROM reservations')
    db.execute('DELETE FROM client_names')
    db.commit()
    print("✅ Reservations cleared")


def random_booking(day: str, names: list) -> dict:
    """Build one plausible booking for a day."""
    timeslot = random.choices(
        ['morning', 'afternoon', 'full_day'], weights=[5, 4, 2]
    )[0]
    nb_people = random.choices(range(1, 9), weights=[3, 8, 4, 6, 2, 2, 1, 1])[0]
    allocation = suggest_canoe_allocation(nb_people)

    # Some groups prefer single canoes for everyone
    if nb_people <= 3 and random.random() < 0.3:
        allocation = {'single': nb_people, 'double': 0}

    return {
        'name': random.choice(names),
        'date': day,
        'arrival_time': random.choice(SLOT_ARRIVALS[timeslot]),
        'nb_people': nb_people,
        'single_canoes': allocation['single'],
        'double_canoes': allocation['double'],
        'timeslot': timeslot,
    }


def book_if_available(booking: dict):
    """Create the booking unless it would overbook its slot."""
    check = check_overbooking(
        booking['date'], booking['timeslot'],
        booking['single_canoes'], booking['double_canoes']
    )
    if check['is_overbooked']:
        return None
    return create_reservation(**booking)


def seed_past_days(names: list, today: datetime) -> int:
    """Closed reservations for the last 14 days."""
    print("📅 Creating past reservations...")
    count = 0
    for offset in range(14, 0, -1):
        day = (today - timedelta(days=offset)).strftime('%Y-%m-%d')
        for _ in range(random.randint(3, 9)):
            reservation = book_if_available(random_booking(day, names))
            if reservation is None:
                continue
            count += 1
            if random.random() < 0.1:
                cancel_reservation(reservation['id'], changed_by='demo')
                continue
            departure = datetime.strptime(
                f"{day} {reservation['arrival_time']}", '%Y-%m-%d %H:%M'
            ) + timedelta(minutes=random.randint(0, 20))
            mark_on_water(reservation['id'], now=departure, changed_by='demo')
            hours = 8 if reservation['timeslot'] == 'full_day' else 3
            mark_completed(
                reservation['id'],
                now=departure + timedelta(hours=hours, minutes=random.randint(-30, 45)),
                changed_by='demo'
            )
    print(f"   Created {count} past reservations")
    return count


def seed_today(names: list, now: datetime) -> int:
    """Today's board: some out on the water, the rest pending."""
    print("🛶 Creating today's reservations...")
    day = now.strftime('%Y-%m-%d')
    count = 0
    for _ in range(8):
        reservation = book_if_available(random_booking(day, names))
        if reservation is None:
            continue
        count += 1
        expected = datetime.strptime(f"{day} {reservation['arrival_time']}", '%Y-%m-%d %H:%M')
        # Leave roughly a third of the arrived groups pending so they show as late
        if expected < now and random.random() < 0.66:
            mark_on_water(reservation['id'], now=expected + timedelta(minutes=10), changed_by='demo')
    print(f"   Created {count} reservations for today")
    return count


def seed_upcoming(names: list, today: datetime) -> int:
    """Pending bookings for the next 7 days."""
    print("🗓️ Creating upcoming reservations...")
    count = 0
    for offset in range(1, 8):
        day = (today + timedelta(days=offset)).strftime('%Y-%m-%d')
        for _ in range(random.randint(2, 7)):
            if book_if_available(random_booking(day, names)) is not None:
                count += 1
    print(f"   Created {count} upcoming reservations")
    return count


def print_summary(db):
    """Print counts per status."""
    print()
    print("=" * 50)
    print("📊 DEMO DATA SUMMARY")
    print("=" * 50)
    rows = db.execute('''
        SELECT status, COUNT(*) AS count FROM reservations GROUP BY status ORDER BY status
    ''').fetchall()
    for row in rows:
        print(f"   • {row['status']}: {row['count']}")
    names = db.execute('SELECT COUNT(*) AS count FROM client_names').fetchone()
    print(f"👥 Client names indexed: {names['count']}")


def main():
    """Main execution function."""
    print("🌊 Canoe Rental Demo Seed Script")
    print("=" * 50)

    app = create_app(os.environ.get('FLASK_ENV', 'development'))

    try:
        with app.app_context():
            if not is_initialized():
                init_db()

            db = get_db()
            if '--keep' not in sys.argv:
                clear_demo_data(db)

            names = [f'{random.choice(FIRST_NAMES)} {last}' for last in LAST_NAMES * 5]
            now = get_local_now()

            seed_past_days(names, now)
            seed_today(names, now)
            seed_upcoming(names, now)

            print_summary(db)

        print("\n🎉 Demo seed completed successfully!")

    except Exception as e:
        print(f"❌ Error during seeding: {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
