"""
Database seed data.
Initial data population for fresh database installations.
"""

DEFAULT_SETTINGS = {
    'total_single_canoes': 10,
    'total_double_canoes': 5,
    'auto_backup_enabled': 1,
    'morning_start': '09:00',
    'morning_end': '13:00',
    'afternoon_start': '14:00',
    'afternoon_end': '18:00',
}


def seed_database(db):
    """Insert initial seed data."""
    seed_settings(db)


def seed_settings(db):
    """Insert the settings row if it does not exist yet."""
    row = db.execute('SELECT COUNT(*) AS count FROM settings').fetchone()
    if row[0]:
        return

    columns = ', '.join(DEFAULT_SETTINGS)
    placeholders = ', '.join('?' * len(DEFAULT_SETTINGS))
    db.execute(
        f'INSERT INTO settings (id, {columns}) VALUES (1, {placeholders})',
        tuple(DEFAULT_SETTINGS.values())
    )
