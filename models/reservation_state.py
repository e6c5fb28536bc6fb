"""
Reservation status lifecycle.
Handles guarded transitions, lifecycle timestamps and the status history.

    pending --> on_water --> completed
       |           |  ^
       |           +--+ (re-departure refreshes departure_time)
       v           v
       +------> canceled
"""

import logging
from datetime import datetime

from database import get_db
from utils.audit import record_history
from utils.datetime_helpers import get_local_now, timestamp, to_wall_clock
from utils.errors import (
    InvalidStatusTransitionError, ReservationNotFoundError, ValidationError
)
from utils.messages import get_message

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

STATUSES = ('pending', 'on_water', 'completed', 'canceled')

# Statuses that hold canoes
ACTIVE_STATUSES = ('pending', 'on_water')

VALID_TRANSITIONS = {
    'pending': ['on_water', 'canceled'],
    'on_water': ['on_water', 'completed', 'canceled'],
    'completed': [],
    'canceled': [],
}

# Imported stores may carry statuses from earlier releases
LEGACY_STATUS_MAP = {
    'ongoing': 'on_water',
    'arrived': 'on_water',
}


def normalize_status(status: str) -> str:
    """Map legacy status names onto the current ones."""
    return LEGACY_STATUS_MAP.get(status, status)


def validate_status_transition(current_status: str, new_status: str,
                               bypass_validation: bool = False) -> None:
    """
    Check a lifecycle transition against VALID_TRANSITIONS.

    Args:
        current_status: Status stored on the reservation
        new_status: Requested status
        bypass_validation: Skip the table (corrective writes)

    Raises:
        ValidationError: Unknown target status
        InvalidStatusTransitionError: Transition not allowed
    """
    if new_status not in STATUSES:
        raise ValidationError(get_message('invalid_status', status=new_status))

    if bypass_validation:
        return

    allowed = VALID_TRANSITIONS.get(current_status, [])
    if new_status not in allowed:
        raise InvalidStatusTransitionError(current_status, new_status, allowed)


def _resolve_now(now: datetime = None) -> datetime:
    if now is None:
        return get_local_now()
    return to_wall_clock(now)


def fetch_reservation_row(cursor, reservation_id: int) -> dict:
    """
    Load one reservation through an open cursor.

    Raises:
        ReservationNotFoundError: If no row matches
    """
    cursor.execute('SELECT * FROM reservations WHERE id = ?', (reservation_id,))
    row = cursor.fetchone()
    if row is None:
        raise ReservationNotFoundError(reservation_id)
    return dict(row)


# =============================================================================
# LIFECYCLE ACTIONS
# =============================================================================

def _apply_status(reservation_id: int, new_status: str, extra_sql: str = '',
                  extra_params: tuple = (), bypass_validation: bool = False,
                  changed_by: str = None, moment: str = None) -> dict:
    """
    Write a status change, its side-effect columns and one history row in
    a single transaction. updated_at and the history row share one timestamp.

    Returns:
        dict: The reservation after the change
    """
    moment = moment or timestamp(get_local_now())
    db = get_db()
    cursor = db.cursor()

    try:
        reservation = fetch_reservation_row(cursor, reservation_id)
        old_status = reservation['status']
        validate_status_transition(old_status, new_status, bypass_validation)

        cursor.execute(f'''
            UPDATE reservations
            SET status = ?{extra_sql},
                updated_at = ?
            WHERE id = ?
        ''', (new_status, *extra_params, moment, reservation_id))

        record_history(cursor, reservation_id, 'status', old_status, new_status,
                       changed_by, moment)

        updated = fetch_reservation_row(cursor, reservation_id)
        db.commit()

    except Exception:
        db.rollback()
        raise

    logger.info('Reservation %s: %s -> %s', reservation_id, old_status, new_status)
    return updated


def mark_on_water(reservation_id: int, now: datetime = None, changed_by: str = None) -> dict:
    """
    Send a reservation out on the water.

    The first arrival is kept: actual_arrival_time is only set when empty.
    departure_time is refreshed every time.

    Args:
        reservation_id: Reservation ID
        now: Moment of departure (defaults to local now)
        changed_by: Optional actor label

    Returns:
        dict: Updated reservation
    """
    moment = timestamp(_resolve_now(now))
    return _apply_status(
        reservation_id, 'on_water',
        extra_sql=''',
                actual_arrival_time = COALESCE(actual_arrival_time, ?),
                departure_time = ?''',
        extra_params=(moment, moment),
        changed_by=changed_by,
        moment=moment,
    )


def mark_completed(reservation_id: int, now: datetime = None, changed_by: str = None) -> dict:
    """
    Close a rental when the canoes come back.

    Args:
        reservation_id: Reservation ID
        now: Moment of return (defaults to local now)
        changed_by: Optional actor label

    Returns:
        dict: Updated reservation
    """
    moment = timestamp(_resolve_now(now))
    return _apply_status(
        reservation_id, 'completed',
        extra_sql=''',
                return_time = ?''',
        extra_params=(moment,),
        changed_by=changed_by,
        moment=moment,
    )


def cancel_reservation(reservation_id: int, changed_by: str = None) -> dict:
    """Cancel a pending or on-water reservation. Its canoes become available."""
    return _apply_status(reservation_id, 'canceled', changed_by=changed_by)


def force_set_status(reservation_id: int, status: str, changed_by: str = None) -> dict:
    """
    Write any status regardless of the transition table.

    Corrective path for operator mistakes (e.g. reopening a completed
    rental). Lifecycle timestamps are left untouched; the change is still
    recorded in the history.

    Args:
        reservation_id: Reservation ID
        status: Target status (legacy names accepted)
        changed_by: Optional actor label

    Returns:
        dict: Updated reservation
    """
    status = normalize_status(status)
    updated = _apply_status(
        reservation_id, status, bypass_validation=True, changed_by=changed_by
    )
    logger.warning('Reservation %s status forced to %s', reservation_id, status)
    return updated


# =============================================================================
# HISTORY
# =============================================================================

def get_reservation_history(reservation_id: int) -> list:
    """
    Get the change history of a reservation, newest first.

    Args:
        reservation_id: Reservation ID

    Returns:
        list: History entry dicts
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT id, reservation_id, field_name, old_value, new_value,
               changed_at, changed_by
        FROM reservation_history
        WHERE reservation_id = ?
        ORDER BY changed_at DESC, id DESC
    ''', (reservation_id,))
    return [dict(row) for row in cursor.fetchall()]
