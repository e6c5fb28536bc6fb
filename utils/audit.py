"""
Reservation audit trail helpers.

Every change to a tracked reservation field is appended to
reservation_history as one row (field, old value, new value). Rows are
never updated; they disappear only with their reservation.

These helpers write through the caller's cursor so that the audit rows
commit (or roll back) together with the change they describe.
"""

import logging

from utils.datetime_helpers import get_local_now, timestamp

logger = logging.getLogger(__name__)


TRACKED_FIELDS = (
    'name',
    'date',
    'nb_people',
    'single_canoes',
    'double_canoes',
    'arrival_time',
    'timeslot',
    'status',
)


def _stringify(value) -> str | None:
    """History values are stored as text; NULL stays NULL."""
    if value is None:
        return None
    return str(value)


def diff_fields(before: dict, changes: dict) -> list:
    """
    Compare proposed values with the current row.

    Args:
        before: Current reservation (dict or sqlite3.Row converted to dict)
        changes: Proposed field values

    Returns:
        list: (field_name, old_value, new_value) for tracked fields that differ
    """
    diffs = []
    for field in TRACKED_FIELDS:
        if field not in changes:
            continue
        old_value = before.get(field)
        new_value = changes[field]
        if old_value != new_value:
            diffs.append((field, old_value, new_value))
    return diffs


def record_history(cursor, reservation_id: int, field_name: str,
                   old_value, new_value, changed_by: str = None,
                   changed_at: str = None) -> int:
    """
    Append one history row.

    Args:
        cursor: Cursor of the transaction performing the change
        reservation_id: Reservation ID
        field_name: Changed field
        old_value: Previous value
        new_value: New value
        changed_by: Optional actor label
        changed_at: Local ISO timestamp of the change (defaults to now)

    Returns:
        int: New history row ID
    """
    cursor.execute('''
        INSERT INTO reservation_history
        (reservation_id, field_name, old_value, new_value, changed_by, changed_at)
        VALUES (?, ?, ?, ?, ?, ?)
    ''', (
        reservation_id, field_name, _stringify(old_value), _stringify(new_value),
        changed_by, changed_at or timestamp(get_local_now())
    ))

    logger.debug(
        'reservation %s: %s %r -> %r', reservation_id, field_name, old_value, new_value
    )
    return cursor.lastrowid


def record_changes(cursor, reservation_id: int, diffs: list, changed_by: str = None,
                   changed_at: str = None) -> int:
    """
    Append one history row per (field, old, new) tuple.

    Returns:
        int: Number of rows written
    """
    for field_name, old_value, new_value in diffs:
        record_history(cursor, reservation_id, field_name, old_value, new_value,
                       changed_by, changed_at)
    return len(diffs)


__all__ = [
    'TRACKED_FIELDS',
    'diff_fields',
    'record_history',
    'record_changes',
]
