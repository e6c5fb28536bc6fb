"""
Database migrations package.
Organized by feature area for maintainability.

Each module contains related migrations that can be run independently.
The run_all_migrations() function executes all migrations in order.
"""

from .reservations import (
    migrate_reservation_timestamps,
    migrate_legacy_statuses,
)
from .settings import migrate_settings_schedule_times


# Ordered list of all migrations
MIGRATIONS = [
    # Phase 1: Lifecycle tracking
    ('reservation_timestamps', migrate_reservation_timestamps),
    ('legacy_statuses', migrate_legacy_statuses),

    # Phase 2: Configurable schedule
    ('settings_schedule_times', migrate_settings_schedule_times),
]


def run_all_migrations() -> dict:
    """
    Run all migrations in order.

    Each migration is idempotent - safe to run multiple times.

    Returns:
        dict: {
            'total': int,
            'applied': int,
            'skipped': int,
            'failed': int,
            'results': [(name, bool, str), ...]
        }
    """
    results = []
    applied = 0
    skipped = 0
    failed = 0

    print("=" * 60)
    print("Running all database migrations...")
    print("=" * 60)

    for name, migration_func in MIGRATIONS:
        try:
            result = migration_func()
            if result:
                applied += 1
                results.append((name, True, 'applied'))
            else:
                skipped += 1
                results.append((name, True, 'skipped'))
        except Exception as e:
            failed += 1
            results.append((name, False, str(e)))
            print(f"ERROR in migration {name}: {e}")

    print("=" * 60)
    print(f"Migrations complete: {applied} applied, {skipped} skipped, {failed} failed")
    print("=" * 60)

    return {
        'total': len(MIGRATIONS),
        'applied': applied,
        'skipped': skipped,
        'failed': failed,
        'results': results
    }


__all__ = [
    'run_all_migrations',
    'MIGRATIONS',
    'migrate_reservation_timestamps',
    'migrate_legacy_statuses',
    'migrate_settings_schedule_times',
]
