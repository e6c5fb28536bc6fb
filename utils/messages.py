"""
Centralized UI messages.
All user-facing API text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'reservation_created': 'Reservation created successfully',
    'reservation_updated': 'Reservation updated successfully',
    'reservation_deleted': 'Reservation deleted',
    'reservation_duplicated': 'Reservation duplicated',
    'reservation_on_water': 'Reservation marked on the water',
    'reservation_completed': 'Reservation marked completed',
    'reservation_canceled': 'Reservation canceled',
    'status_forced': 'Status set to {status}',
    'settings_updated': 'Settings saved successfully',
    'import_success': 'Data imported successfully',
    'backup_created': 'Backup created',

    # Error messages
    'reservation_not_found': 'Reservation not found',
    'invalid_data_format': 'Invalid data format',
    'import_failed': 'Failed to import data: Invalid format',
    'settings_not_found': 'Settings not found',
    'date_required': 'Date is required',
    'invalid_date': 'Invalid date. Use YYYY-MM-DD',
    'invalid_status': 'Invalid status: {status}',
    'invalid_timeslot': 'Invalid time slot: {timeslot}',
    'invalid_period': 'Period must be between 1 and {max_days} days',
    'json_required': 'A JSON body is required',
    'not_found': 'Resource not found',
    'internal_error': 'Internal server error',

    # Warnings
    'overbooking_detected': 'Overbooking detected: {issues}',
    'overbooking_confirm': 'Resend with "force": true to proceed anyway',
    'overbooking_forced': 'Saved despite overbooking: {details}',

    # Status labels
    'status_pending': 'Pending',
    'status_on_water': 'On the water',
    'status_completed': 'Completed',
    'status_canceled': 'Canceled',

    # Slot labels
    'timeslot_morning': 'Morning',
    'timeslot_afternoon': 'Afternoon',
    'timeslot_full_day': 'Full day',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
