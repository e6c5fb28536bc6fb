#!/usr/bin/env python
"""
Run database migrations.
"""

from app import create_app
from database.connection import is_initialized
from database.migrations import run_all_migrations

if __name__ == '__main__':
    app = create_app()

    with app.app_context():
        # Check if database needs initialization
        if not is_initialized():
            print("Database not initialized. Initializing from schema...")
            from database.connection import init_db
            init_db()
            print("\nDatabase initialized. Now running migrations...\n")

        print("Running migrations...")
        result = run_all_migrations()

        print(f"\n{'='*60}")
        print("Migration Summary:")
        print(f"{'='*60}")
        print(f"Total migrations: {result['total']}")
        print(f"Applied: {result['applied']}")
        print(f"Skipped: {result['skipped']}")
        print(f"Failed: {result['failed']}")

        failures = [(name, msg) for name, ok, msg in result['results'] if not ok]
        if failures:
            print("\nErrors:")
            for name, msg in failures:
                print(f"  - {name}: {msg}")

        print(f"{'='*60}")
