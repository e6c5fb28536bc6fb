"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'reservation_history',
        'reservations',
        'client_names',
        'settings',
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Reservations
    db.execute('''
        CREATE TABLE reservations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            date TEXT NOT NULL,
            nb_people INTEGER NOT NULL,
            single_canoes INTEGER DEFAULT 0,
            double_canoes INTEGER DEFAULT 0,
            arrival_time TEXT NOT NULL,
            timeslot TEXT NOT NULL CHECK (timeslot IN ('morning', 'afternoon', 'full_day')),
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'on_water', 'completed', 'canceled')),
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
            actual_arrival_time TEXT,
            departure_time TEXT,
            return_time TEXT
        )
    ''')

    # 2. Audit trail (append-only)
    db.execute('''
        CREATE TABLE reservation_history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            reservation_id INTEGER NOT NULL REFERENCES reservations(id) ON DELETE CASCADE,
            field_name TEXT NOT NULL,
            old_value TEXT,
            new_value TEXT,
            changed_at TEXT DEFAULT CURRENT_TIMESTAMP,
            changed_by TEXT
        )
    ''')

    # 3. Inventory & schedule (single row, id = 1)
    db.execute('''
        CREATE TABLE settings (
            id INTEGER PRIMARY KEY DEFAULT 1 CHECK (id = 1),
            total_single_canoes INTEGER DEFAULT 10,
            total_double_canoes INTEGER DEFAULT 5,
            auto_backup_enabled INTEGER DEFAULT 1,
            last_backup_date TEXT,
            morning_start TEXT DEFAULT '09:00',
            morning_end TEXT DEFAULT '13:00',
            afternoon_start TEXT DEFAULT '14:00',
            afternoon_end TEXT DEFAULT '18:00',
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 4. Client name autocomplete
    db.execute('''
        CREATE TABLE client_names (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT UNIQUE NOT NULL,
            usage_count INTEGER DEFAULT 1,
            last_used TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create indexes for frequent queries."""
    indexes = [
        'CREATE INDEX IF NOT EXISTS idx_reservations_date_status ON reservations(date, status)',
        'CREATE INDEX IF NOT EXISTS idx_reservations_name ON reservations(name)',
        'CREATE INDEX IF NOT EXISTS idx_history_reservation ON reservation_history(reservation_id)',
        'CREATE INDEX IF NOT EXISTS idx_client_names_usage ON client_names(usage_count DESC, last_used DESC)',
    ]

    for sql in indexes:
        db.execute(sql)
