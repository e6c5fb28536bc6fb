"""
Tests for inventory and schedule settings.
"""

import pytest


class TestGetSettings:
    """Tests for get_settings()."""

    def test_seeded_defaults(self, app):
        """Fresh stores have 10 single, 5 double and the default schedule."""
        from models.settings import get_settings

        with app.app_context():
            settings = get_settings()
            assert settings.total_single_canoes == 10
            assert settings.total_double_canoes == 5
            assert settings.morning_start == '09:00'
            assert settings.morning_end == '13:00'
            assert settings.afternoon_start == '14:00'
            assert settings.afternoon_end == '18:00'
            assert settings.auto_backup_enabled is True
            assert settings.last_backup_date is None

    def test_settings_are_immutable(self, app):
        """The settings value cannot be mutated in place."""
        from dataclasses import FrozenInstanceError
        from models.settings import get_settings

        with app.app_context():
            settings = get_settings()
            with pytest.raises(FrozenInstanceError):
                settings.total_single_canoes = 99


class TestUpdateSettings:
    """Tests for update_settings()."""

    def test_partial_update(self, app):
        """Only the given fields change."""
        from models.settings import update_settings, get_settings

        with app.app_context():
            update_settings(total_single_canoes=12, morning_end='12:30')
            settings = get_settings()
            assert settings.total_single_canoes == 12
            assert settings.total_double_canoes == 5
            assert settings.morning_end == '12:30'

    def test_times_stored_zero_padded(self, app):
        """'9:00' is stored as '09:00'."""
        from models.settings import update_settings

        with app.app_context():
            assert update_settings(morning_start='8:00').morning_start == '08:00'

    @pytest.mark.parametrize('fields, fragment', [
        ({'total_single_canoes': -1}, 'cannot be negative'),
        ({'total_single_canoes': 0, 'total_double_canoes': 0}, 'At least one canoe'),
        ({'morning_start': '13:00'}, 'Morning end time must be after morning start time'),
        ({'afternoon_end': '13:00'}, 'Afternoon end time must be after afternoon start time'),
        ({'morning_end': '14:30'}, 'Morning must end before the afternoon begins'),
        ({'afternoon_start': '25:00'}, 'Invalid time format'),
        ({'color': 'blue'}, 'Unknown settings field'),
    ])
    def test_invalid_updates_rejected(self, app, fields, fragment):
        """Each broken rule is named; nothing is written."""
        from models.settings import update_settings, get_settings
        from utils.errors import ValidationError

        with app.app_context():
            before = get_settings()
            with pytest.raises(ValidationError) as exc_info:
                update_settings(**fields)
            assert fragment in str(exc_info.value)
            assert get_settings() == before

    def test_morning_may_end_when_afternoon_starts(self, app):
        """morning_end == afternoon_start is allowed."""
        from models.settings import update_settings

        with app.app_context():
            settings = update_settings(morning_end='14:00')
            assert settings.morning_end == settings.afternoon_start

    def test_one_type_may_be_zero(self, app):
        """A fleet of only double canoes is valid."""
        from models.settings import update_settings

        with app.app_context():
            assert update_settings(total_single_canoes=0).total_single_canoes == 0

    def test_record_backup_date(self, app):
        """The backup stamp is stored on the row."""
        from models.settings import record_backup_date, get_settings

        with app.app_context():
            record_backup_date('2025-06-01T18:30:00')
            assert get_settings().last_backup_date == '2025-06-01T18:30:00'
