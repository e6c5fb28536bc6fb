"""
Tests for input validation utilities.
"""

import pytest
from utils.errors import ValidationError
from utils.validators import (
    validate_date_format,
    validate_time_format,
    normalize_time,
    validate_canoe_capacity,
    validate_schedule,
    validate_inventory,
    coerce_int,
    sanitize_input
)


class TestValidateTimeFormat:
    """Tests for clock time validation."""

    def test_valid_times(self):
        """H:MM and HH:MM within 00:00-23:59."""
        for value in ('00:00', '9:05', '09:05', '13:00', '23:59'):
            assert validate_time_format(value) is True

    def test_invalid_times(self):
        """Out of range or malformed."""
        for value in ('24:00', '12:60', '9h30', '0930', '', None, '12:5'):
            assert validate_time_format(value) is False

    def test_normalize_pads_hours(self):
        """Single-digit hours are zero-padded."""
        assert normalize_time('9:05') == '09:05'
        assert normalize_time('18:00') == '18:00'

    def test_normalize_rejects_invalid(self):
        """Invalid input raises ValidationError with the value."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_time('25:00')
        assert '25:00' in str(exc_info.value)


class TestValidateDateFormat:
    """Tests for date validation."""

    def test_valid_date(self):
        """YYYY-MM-DD dates pass."""
        assert validate_date_format('2025-06-01') is True

    def test_invalid_date(self):
        """Other formats and impossible dates fail."""
        assert validate_date_format('01/06/2025') is False
        assert validate_date_format('2025-02-30') is False
        assert validate_date_format(None) is False


class TestValidateCanoeCapacity:
    """Tests for the seating invariant."""

    def test_exact_fit(self):
        """single + 2 * double == people is fine."""
        assert validate_canoe_capacity(5, 1, 2) == (True, '')

    def test_spare_seats_allowed(self):
        """More seats than people is fine."""
        assert validate_canoe_capacity(1, 0, 1)[0] is True

    def test_not_enough_seats(self):
        """The message gives both numbers."""
        ok, msg = validate_canoe_capacity(6, 1, 2)
        assert ok is False
        assert 'accommodate 5 people' in msg
        assert 'has 6 people' in msg

    def test_no_canoe(self):
        """At least one canoe is required."""
        assert validate_canoe_capacity(1, 0, 0) == (False, 'Please select at least one canoe')


class TestValidateSchedule:
    """Tests for slot boundaries."""

    def test_default_schedule(self):
        """Defaults are valid."""
        assert validate_schedule('09:00', '13:00', '14:00', '18:00') == (True, '')

    def test_unpadded_times_compare_correctly(self):
        """'9:00' compares as 09:00, not as text."""
        assert validate_schedule('9:00', '13:00', '14:00', '18:00')[0] is True

    def test_overlapping_slots(self):
        """Morning ending after the afternoon starts is rejected."""
        ok, msg = validate_schedule('09:00', '15:00', '14:00', '18:00')
        assert ok is False
        assert msg == 'Morning must end before the afternoon begins'


class TestValidateInventory:
    """Tests for inventory totals."""

    def test_valid(self):
        assert validate_inventory(10, 5) == (True, '')

    def test_negative(self):
        assert validate_inventory(-1, 5)[0] is False

    def test_both_zero(self):
        assert validate_inventory(0, 0) == (False, 'At least one canoe must be available')


class TestCoerceInt:
    """Tests for integer coercion of payload values."""

    def test_accepts_ints_and_numeric_strings(self):
        assert coerce_int(3, 'nb_people') == 3
        assert coerce_int('4', 'nb_people') == 4
        assert coerce_int(2.0, 'nb_people') == 2

    @pytest.mark.parametrize('value', [True, 'abc', None, 2.5])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError) as exc_info:
            coerce_int(value, 'nb_people')
        assert 'nb_people must be a whole number' in str(exc_info.value)


class TestSanitizeInput:
    """Tests for input sanitization."""

    def test_trims_whitespace(self):
        """Test whitespace trimming."""
        assert sanitize_input('  hello  ') == 'hello'

    def test_max_length(self):
        """Test max length truncation."""
        assert sanitize_input('hello world', max_length=5) == 'hello'

    def test_empty_input(self):
        """Test empty input handling."""
        assert sanitize_input('') == ''
        assert sanitize_input(None) == ''
