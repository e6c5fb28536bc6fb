"""
Database connection management.
Handles per-context connections, initialization, and teardown.
"""

import os
import sqlite3
from flask import g, current_app


def get_db():
    """
    Get the database connection for the current app context, with row factory.

    Returns:
        sqlite3.Connection: Database connection object
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/canoe_rentals.db')
        db_dir = os.path.dirname(db_path)
        if db_path != ':memory:' and db_dir:
            os.makedirs(db_dir, exist_ok=True)

        g.db = sqlite3.connect(
            db_path,
            detect_types=sqlite3.PARSE_DECLTYPES
        )
        g.db.row_factory = sqlite3.Row
        # History rows cascade with their reservation
        g.db.execute('PRAGMA foreign_keys = ON')
        g.db.execute('PRAGMA journal_mode = WAL')
    return g.db


def close_db(e=None):
    """
    Close database connection.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db():
    """
    Initialize database: drop existing tables, create new schema, insert seed data.
    WARNING: This will delete all existing data!
    """
    from database.schema import drop_tables, create_tables, create_indexes
    from database.seed import seed_database

    db = get_db()

    drop_tables(db)
    create_tables(db)
    create_indexes(db)
    seed_database(db)

    db.commit()
    current_app.logger.info('Database initialized at %s', current_app.config.get('DATABASE_PATH'))


def is_initialized() -> bool:
    """Check whether the core tables exist."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT name FROM sqlite_master
        WHERE type = 'table' AND name = 'reservations'
    ''')
    return cursor.fetchone() is not None
