"""
Reservation query functions.
Handles listing, filtering, search and the live board with time alerts.
"""

from datetime import datetime

from database import get_db
from utils.datetime_helpers import get_local_now, to_wall_clock
from utils.errors import ValidationError
from utils.messages import get_message
from .reservation_state import STATUSES
from .settings import InventorySettings, get_settings
from .time_alerts import annotate_reservation


# Pseudo-status accepted by the live board filter
LATE_FILTER = 'late'


# =============================================================================
# LIST QUERIES
# =============================================================================

def get_reservations(date: str = None, status: str = None) -> list:
    """
    List reservations, newest date first then by arrival time.

    Args:
        date: Exact date filter (YYYY-MM-DD)
        status: Status filter

    Returns:
        list: Reservation dicts
    """
    db = get_db()
    cursor = db.cursor()

    query = 'SELECT * FROM reservations WHERE 1=1'
    params = []

    if date:
        query += ' AND date = ?'
        params.append(date)

    if status:
        query += ' AND status = ?'
        params.append(status)

    query += ' ORDER BY date DESC, arrival_time ASC, id ASC'

    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]


def search_reservations(query: str) -> list:
    """
    Search reservations by client name or date fragment.

    Args:
        query: Text to match

    Returns:
        list: Matching reservations
    """
    query = (query or '').strip()
    if not query:
        return get_reservations()

    db = get_db()
    cursor = db.cursor()
    pattern = f'%{query}%'
    cursor.execute('''
        SELECT * FROM reservations
        WHERE name LIKE ? OR date LIKE ?
        ORDER BY date DESC, arrival_time ASC, id ASC
    ''', (pattern, pattern))
    return [dict(row) for row in cursor.fetchall()]


def get_reservations_by_status(date: str, status: str) -> list:
    """Reservations of one date in one status, by arrival time."""
    if status not in STATUSES:
        raise ValidationError(get_message('invalid_status', status=status))

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT * FROM reservations
        WHERE date = ? AND status = ?
        ORDER BY arrival_time ASC, id ASC
    ''', (date, status))
    return [dict(row) for row in cursor.fetchall()]


def get_live_reservations(date: str) -> dict:
    """
    Reservations of a date grouped for the live board.

    Returns:
        dict: {'pending': [...], 'on_water': [...], 'completed': [...]}
    """
    return {
        status: get_reservations_by_status(date, status)
        for status in ('pending', 'on_water', 'completed')
    }


# =============================================================================
# LIVE BOARD
# =============================================================================

def _board_sort_key(reservation: dict) -> tuple:
    return (
        0 if reservation['is_late'] else 1,
        0 if reservation['status'] == 'pending' else 1,
        reservation['arrival_time'],
        reservation['id'],
    )


def list_reservations_with_alerts(
    date: str = None,
    status: str = None,
    search: str = None,
    now: datetime = None,
    settings: InventorySettings = None
) -> list:
    """
    List reservations annotated with lateness and slot alerts.

    Late reservations come first, then other pending ones, then the rest,
    each group by arrival time.

    Args:
        date: Date filter (all dates if omitted)
        status: A status, or 'late' for late pending reservations
        search: Name fragment
        now: Current wall-clock time (defaults to local now)
        settings: Pre-loaded settings

    Returns:
        list: Reservation dicts with is_late, late_minutes and time_alert
    """
    if status and status != LATE_FILTER and status not in STATUSES:
        raise ValidationError(get_message('invalid_status', status=status))

    now = get_local_now() if now is None else to_wall_clock(now)
    if settings is None:
        settings = get_settings()

    db_status = 'pending' if status == LATE_FILTER else status
    reservations = get_reservations(date=date, status=db_status)

    if search:
        needle = search.strip().lower()
        reservations = [r for r in reservations if needle in r['name'].lower()]

    annotated = [annotate_reservation(r, settings, now) for r in reservations]

    if status == LATE_FILTER:
        annotated = [r for r in annotated if r['is_late']]

    annotated.sort(key=_board_sort_key)
    return annotated


def get_status_counts(date: str, now: datetime = None,
                      settings: InventorySettings = None) -> dict:
    """
    Count a date's reservations per status, plus late ones.

    Returns:
        dict: {'pending', 'on_water', 'completed', 'canceled', 'late', 'total'}
    """
    reservations = list_reservations_with_alerts(date=date, now=now, settings=settings)

    counts = {status: 0 for status in STATUSES}
    counts['late'] = 0
    for res in reservations:
        counts[res['status']] = counts.get(res['status'], 0) + 1
        if res['is_late']:
            counts['late'] += 1
    counts['total'] = len(reservations)
    return counts
