"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
import tempfile

# Set test database path BEFORE importing app
# This ensures config classes never point at the real database
os.environ['DATABASE_PATH'] = os.path.join(tempfile.gettempdir(), 'canoe_rentals_test.db')
os.environ['FLASK_ENV'] = 'test'


@pytest.fixture
def app(tmp_path):
    """Create test application with a fresh database file per test."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = str(tmp_path / 'canoe_rentals_test.db')

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_reservation(app):
    """
    Factory creating reservations through the model layer.

    Defaults describe a 2-person morning booking with one double canoe.
    """
    from models.reservation import create_reservation

    def _make(**overrides):
        fields = {
            'name': 'Test Client',
            'date': '2025-06-01',
            'arrival_time': '09:00',
            'nb_people': 2,
            'single_canoes': 0,
            'double_canoes': 1,
            'timeslot': 'morning',
        }
        fields.update(overrides)
        with app.app_context():
            return create_reservation(**fields)

    return _make
