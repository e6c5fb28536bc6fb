"""
Input validation helper functions.
Provides validation for reservation fields, clock times and schedules.
"""

import re
from datetime import datetime

from utils.errors import ValidationError


TIME_PATTERN = re.compile(r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$')

MAX_PEOPLE = 50
MIN_NAME_LENGTH = 2


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is in YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    try:
        datetime.strptime(date_str, '%Y-%m-%d')
        return True
    except (ValueError, TypeError):
        return False


def validate_time_format(time_str: str) -> bool:
    """
    Validate clock time in H:MM or HH:MM (24h) format.

    Args:
        time_str: Time string to validate

    Returns:
        True if valid format
    """
    if not isinstance(time_str, str):
        return False
    return bool(TIME_PATTERN.match(time_str))


def normalize_time(time_str: str) -> str:
    """
    Zero-pad a valid clock time ('9:05' -> '09:05').

    Raises:
        ValidationError: If the time is not H:MM / HH:MM
    """
    if not validate_time_format(time_str):
        raise ValidationError(f'Invalid time format: {time_str}. Use HH:MM')
    hours, minutes = time_str.split(':')
    return f'{int(hours):02d}:{minutes}'


def validate_canoe_capacity(nb_people: int, single_canoes: int, double_canoes: int) -> tuple:
    """
    Check that the canoe allocation seats everyone.

    Args:
        nb_people: Number of people
        single_canoes: Single canoe count
        double_canoes: Double canoe count

    Returns:
        Tuple of (is_valid, error_message)
    """
    if single_canoes == 0 and double_canoes == 0:
        return False, 'Please select at least one canoe'

    capacity = single_canoes + double_canoes * 2
    if capacity < nb_people:
        return False, (
            f'Selected canoes can accommodate {capacity} people, '
            f'but the reservation has {nb_people} people'
        )

    return True, ''


def validate_schedule(morning_start: str, morning_end: str,
                      afternoon_start: str, afternoon_end: str) -> tuple:
    """
    Validate the four slot boundary times.

    Rules: every time is HH:MM, each slot ends after it starts, and the
    morning ends no later than the afternoon begins.

    Returns:
        Tuple of (is_valid, error_message)
    """
    for value in (morning_start, morning_end, afternoon_start, afternoon_end):
        if not validate_time_format(value):
            return False, f'Invalid time format: {value}. Use HH:MM'

    m_start, m_end, a_start, a_end = (
        normalize_time(v) for v in (morning_start, morning_end, afternoon_start, afternoon_end)
    )

    if m_start >= m_end:
        return False, 'Morning end time must be after morning start time'

    if a_start >= a_end:
        return False, 'Afternoon end time must be after afternoon start time'

    if m_end > a_start:
        return False, 'Morning must end before the afternoon begins'

    return True, ''


def validate_inventory(total_single_canoes: int, total_double_canoes: int) -> tuple:
    """
    Validate inventory totals.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if total_single_canoes < 0 or total_double_canoes < 0:
        return False, 'Canoe counts cannot be negative'

    if total_single_canoes == 0 and total_double_canoes == 0:
        return False, 'At least one canoe must be available'

    return True, ''


def coerce_int(value, field_name: str) -> int:
    """
    Convert a form/JSON value to int or raise a ValidationError naming the field.
    """
    if isinstance(value, bool):
        raise ValidationError(f'{field_name} must be a whole number')
    try:
        number = int(value)
    except (ValueError, TypeError):
        raise ValidationError(f'{field_name} must be a whole number')
    if isinstance(value, float) and value != number:
        raise ValidationError(f'{field_name} must be a whole number')
    return number


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
