"""
Database package for the Canoe Rental Manager.

This package provides modular database operations:
- connection: Database connection management (get_db, close_db, init_db)
- migrations: Schema migration functions
- schema: Table creation and indexes
- seed: Initial seed data

All functions are re-exported from this module.
"""

from database.connection import get_db, close_db, init_db, is_initialized
from database.migrations import (
    run_all_migrations,
    migrate_reservation_timestamps,
    migrate_legacy_statuses,
    migrate_settings_schedule_times,
)
from database.schema import drop_tables, create_tables, create_indexes
from database.seed import seed_database

__all__ = [
    # Connection
    'get_db',
    'close_db',
    'init_db',
    'is_initialized',
    # Migrations
    'run_all_migrations',
    'migrate_reservation_timestamps',
    'migrate_legacy_statuses',
    'migrate_settings_schedule_times',
    # Schema
    'drop_tables',
    'create_tables',
    'create_indexes',
    # Seed
    'seed_database',
]
