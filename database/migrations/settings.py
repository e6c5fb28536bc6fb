"""
Settings migrations.
Schedule boundaries were introduced after the inventory-only settings row.
"""

from database.connection import get_db


SCHEDULE_COLUMNS = [
    ("ALTER TABLE settings ADD COLUMN morning_start TEXT DEFAULT '09:00'", 'morning_start'),
    ("ALTER TABLE settings ADD COLUMN morning_end TEXT DEFAULT '13:00'", 'morning_end'),
    ("ALTER TABLE settings ADD COLUMN afternoon_start TEXT DEFAULT '14:00'", 'afternoon_start'),
    ("ALTER TABLE settings ADD COLUMN afternoon_end TEXT DEFAULT '18:00'", 'afternoon_end'),
]


def migrate_settings_schedule_times() -> bool:
    """
    Migration: Add the four slot boundary columns to the settings row.

    Safe to run multiple times - checks if columns already exist.

    Returns:
        bool: True if migration applied, False if already applied
    """
    db = get_db()
    cursor = db.cursor()

    cursor.execute("PRAGMA table_info(settings)")
    existing_columns = [row['name'] for row in cursor.fetchall()]

    if all(col in existing_columns for _, col in SCHEDULE_COLUMNS):
        print("Migration already applied - schedule columns exist.")
        return False

    print("Applying settings_schedule_times migration...")

    try:
        for sql, col_name in SCHEDULE_COLUMNS:
            if col_name not in existing_columns:
                db.execute(sql)
                print(f"  Added column: {col_name}")

        db.commit()
        print("Migration settings_schedule_times applied successfully!")
        return True

    except Exception as e:
        db.rollback()
        print(f"Migration failed: {e}")
        raise
