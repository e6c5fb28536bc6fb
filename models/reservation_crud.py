"""
Reservation CRUD operations.
Handles create, read, update, duplicate and delete of reservations.
"""

import logging

from database import get_db
from utils.audit import diff_fields, record_changes
from utils.datetime_helpers import get_local_now, timestamp
from utils.errors import ValidationError
from utils.messages import get_message
from utils.validators import (
    MAX_PEOPLE, MIN_NAME_LENGTH, coerce_int, normalize_time,
    sanitize_input, validate_canoe_capacity, validate_date_format
)
from .client_name import update_client_name
from .reservation_availability import validate_timeslot
from .reservation_state import STATUSES, fetch_reservation_row, normalize_status

logger = logging.getLogger(__name__)


EDITABLE_FIELDS = (
    'name', 'date', 'arrival_time', 'nb_people',
    'single_canoes', 'double_canoes', 'timeslot', 'status',
)

ALLOCATION_FIELDS = ('nb_people', 'single_canoes', 'double_canoes')


# =============================================================================
# VALIDATION
# =============================================================================

def _clean_field(field: str, value):
    """Validate and normalize a single reservation field."""
    if field == 'name':
        name = sanitize_input(value if isinstance(value, str) else '', max_length=100)
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(f'Name must be at least {MIN_NAME_LENGTH} characters')
        return name

    if field == 'date':
        if not validate_date_format(value):
            raise ValidationError(get_message('invalid_date'))
        return value

    if field == 'arrival_time':
        return normalize_time(value)

    if field == 'nb_people':
        nb_people = coerce_int(value, 'nb_people')
        if nb_people < 1 or nb_people > MAX_PEOPLE:
            raise ValidationError(f'Number of people must be between 1 and {MAX_PEOPLE}')
        return nb_people

    if field in ('single_canoes', 'double_canoes'):
        count = coerce_int(value, field)
        if count < 0:
            raise ValidationError('Canoe counts cannot be negative')
        return count

    if field == 'timeslot':
        return validate_timeslot(value)

    if field == 'status':
        status = normalize_status(value)
        if status not in STATUSES:
            raise ValidationError(get_message('invalid_status', status=value))
        return status

    raise ValidationError(f'Unknown reservation field: {field}')


def _check_capacity(nb_people: int, single_canoes: int, double_canoes: int) -> None:
    is_valid, error = validate_canoe_capacity(nb_people, single_canoes, double_canoes)
    if not is_valid:
        raise ValidationError(error)


# =============================================================================
# CREATE
# =============================================================================

def create_reservation(
    name: str,
    date: str,
    arrival_time: str,
    nb_people: int,
    single_canoes: int,
    double_canoes: int,
    timeslot: str
) -> dict:
    """
    Create a new reservation in 'pending' status.

    Overbooking is not checked here; callers run check_overbooking() first
    and decide whether to proceed.

    Args:
        name: Client name (2+ characters)
        date: Rental date (YYYY-MM-DD)
        arrival_time: Expected arrival (HH:MM)
        nb_people: Group size (1-50)
        single_canoes: Single canoes allocated
        double_canoes: Double canoes allocated
        timeslot: 'morning', 'afternoon' or 'full_day'

    Returns:
        dict: Created reservation

    Raises:
        ValidationError: If any field is invalid or the canoes cannot seat the group
    """
    data = {
        'name': _clean_field('name', name),
        'date': _clean_field('date', date),
        'arrival_time': _clean_field('arrival_time', arrival_time),
        'nb_people': _clean_field('nb_people', nb_people),
        'single_canoes': _clean_field('single_canoes', single_canoes),
        'double_canoes': _clean_field('double_canoes', double_canoes),
        'timeslot': _clean_field('timeslot', timeslot),
    }
    _check_capacity(data['nb_people'], data['single_canoes'], data['double_canoes'])

    now = timestamp(get_local_now())
    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('''
            INSERT INTO reservations
            (name, date, arrival_time, nb_people, single_canoes, double_canoes,
             timeslot, status, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, 'pending', ?, ?)
        ''', (
            data['name'], data['date'], data['arrival_time'], data['nb_people'],
            data['single_canoes'], data['double_canoes'], data['timeslot'],
            now, now
        ))
        reservation_id = cursor.lastrowid
        reservation = fetch_reservation_row(cursor, reservation_id)
        db.commit()

    except Exception:
        db.rollback()
        raise

    update_client_name(data['name'])
    logger.info(
        'Reservation %s created: %s on %s (%s)',
        reservation_id, data['name'], data['date'], data['timeslot']
    )
    return reservation


# =============================================================================
# READ
# =============================================================================

def get_reservation(reservation_id: int) -> dict:
    """
    Get a reservation by ID.

    Raises:
        ReservationNotFoundError: If it does not exist
    """
    db = get_db()
    return fetch_reservation_row(db.cursor(), reservation_id)


# =============================================================================
# UPDATE
# =============================================================================

def update_reservation(reservation_id: int, changed_by: str = None, **fields) -> dict:
    """
    Update reservation fields.

    One history row is written per field whose value actually changes, and
    updated_at is always refreshed. A 'status' value is written as-is with
    no lifecycle side effects (manual override).

    Args:
        reservation_id: Reservation ID
        changed_by: Optional actor label for history rows
        **fields: Any of EDITABLE_FIELDS

    Returns:
        dict: Updated reservation

    Raises:
        ReservationNotFoundError: If it does not exist
        ValidationError: If a value is invalid or the new allocation cannot
            seat the group
    """
    changes = {}
    for field, value in fields.items():
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f'Unknown reservation field: {field}')
        changes[field] = _clean_field(field, value)

    now = timestamp(get_local_now())
    db = get_db()
    cursor = db.cursor()

    try:
        current = fetch_reservation_row(cursor, reservation_id)

        if any(field in changes for field in ALLOCATION_FIELDS):
            merged = {field: changes.get(field, current[field]) for field in ALLOCATION_FIELDS}
            _check_capacity(merged['nb_people'], merged['single_canoes'], merged['double_canoes'])

        diffs = diff_fields(current, changes)
        changed = {field: new for field, _old, new in diffs}

        set_parts = [f'{field} = ?' for field in changed]
        set_parts.append('updated_at = ?')
        cursor.execute(
            f"UPDATE reservations SET {', '.join(set_parts)} WHERE id = ?",
            (*changed.values(), now, reservation_id)
        )

        record_changes(cursor, reservation_id, diffs, changed_by, now)

        updated = fetch_reservation_row(cursor, reservation_id)
        db.commit()

    except Exception:
        db.rollback()
        raise

    if 'name' in changed:
        update_client_name(changed['name'])

    if diffs:
        logger.info(
            'Reservation %s updated: %s',
            reservation_id, ', '.join(field for field, _old, _new in diffs)
        )
    return updated


# =============================================================================
# DUPLICATE
# =============================================================================

def duplicate_reservation(reservation_id: int) -> dict:
    """
    Copy a reservation as a new pending one.

    The copy keeps date, slot, group and canoes; its name gets a ' (Copy)'
    suffix and the lifecycle timestamps start empty.

    Returns:
        dict: The new reservation

    Raises:
        ReservationNotFoundError: If the source does not exist
    """
    now = timestamp(get_local_now())
    db = get_db()
    cursor = db.cursor()

    try:
        source = fetch_reservation_row(cursor, reservation_id)
        cursor.execute('''
            INSERT INTO reservations
            (name, date, arrival_time, nb_people, single_canoes, double_canoes,
             timeslot, status, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, 'pending', ?, ?)
        ''', (
            f"{source['name']} (Copy)", source['date'], source['arrival_time'],
            source['nb_people'], source['single_canoes'], source['double_canoes'],
            source['timeslot'], now, now
        ))
        copy = fetch_reservation_row(cursor, cursor.lastrowid)
        db.commit()

    except Exception:
        db.rollback()
        raise

    logger.info('Reservation %s duplicated as %s', reservation_id, copy['id'])
    return copy


# =============================================================================
# DELETE
# =============================================================================

def delete_reservation(reservation_id: int) -> bool:
    """
    Delete a reservation. Its history rows go with it.

    Raises:
        ReservationNotFoundError: If it does not exist
    """
    db = get_db()
    cursor = db.cursor()

    try:
        fetch_reservation_row(cursor, reservation_id)
        cursor.execute('DELETE FROM reservations WHERE id = ?', (reservation_id,))
        db.commit()

    except Exception:
        db.rollback()
        raise

    logger.info('Reservation %s deleted', reservation_id)
    return True
