"""
Reservations migrations.
Bring stores created by earlier releases up to the current reservations schema.
"""

from database.connection import get_db


LEGACY_ON_WATER_STATUSES = ('ongoing', 'arrived')


def migrate_reservation_timestamps() -> bool:
    """
    Migration: Add lifecycle timestamp columns to reservations.

    Earlier stores only tracked status; arrival, departure and return
    moments were added later.

    Returns:
        bool: True if migration applied, False if already applied
    """
    db = get_db()
    cursor = db.cursor()

    cursor.execute("PRAGMA table_info(reservations)")
    existing_columns = [row['name'] for row in cursor.fetchall()]

    columns_to_add = [
        ('ALTER TABLE reservations ADD COLUMN actual_arrival_time TEXT', 'actual_arrival_time'),
        ('ALTER TABLE reservations ADD COLUMN departure_time TEXT', 'departure_time'),
        ('ALTER TABLE reservations ADD COLUMN return_time TEXT', 'return_time'),
    ]
    missing = [(sql, col) for sql, col in columns_to_add if col not in existing_columns]

    if not missing:
        print("Migration already applied - reservation timestamp columns exist.")
        return False

    print("Applying reservation_timestamps migration...")

    try:
        for sql, col_name in missing:
            db.execute(sql)
            print(f"  Added column: {col_name}")

        db.commit()
        print("Migration reservation_timestamps applied successfully!")
        return True

    except Exception as e:
        db.rollback()
        print(f"Migration failed: {e}")
        raise


def migrate_legacy_statuses() -> bool:
    """
    Migration: Rename legacy 'ongoing' / 'arrived' statuses to 'on_water'.

    Returns:
        bool: True if rows were rewritten, False if nothing to do
    """
    db = get_db()
    cursor = db.cursor()

    placeholders = ','.join('?' * len(LEGACY_ON_WATER_STATUSES))
    cursor.execute(
        f'SELECT COUNT(*) AS count FROM reservations WHERE status IN ({placeholders})',
        LEGACY_ON_WATER_STATUSES
    )
    if not cursor.fetchone()['count']:
        print("Migration already applied - no legacy statuses.")
        return False

    print("Applying legacy_statuses migration...")

    try:
        cursor.execute(f'''
            UPDATE reservations
            SET status = 'on_water'
            WHERE status IN ({placeholders})
        ''', LEGACY_ON_WATER_STATUSES)
        print(f"  Rewrote {cursor.rowcount} reservation(s) to on_water")

        db.commit()
        print("Migration legacy_statuses applied successfully!")
        return True

    except Exception as e:
        db.rollback()
        print(f"Migration failed: {e}")
        raise
