"""
Canoe availability per time slot and overbooking detection.

A day has two halves. Morning and afternoon reservations consume one half,
full-day reservations consume both. Full-day headroom is therefore the
smaller of the two halves, per canoe type.
"""

from database import get_db
from utils.errors import ValidationError
from utils.messages import get_message
from utils.validators import coerce_int, validate_date_format
from .reservation_state import ACTIVE_STATUSES
from .settings import InventorySettings, get_settings


# =============================================================================
# CONSTANTS
# =============================================================================

TIMESLOTS = ('morning', 'afternoon', 'full_day')

# Halves of the day each slot occupies
SLOT_HALVES = {
    'morning': ('morning',),
    'afternoon': ('afternoon',),
    'full_day': ('morning', 'afternoon'),
}


def validate_timeslot(timeslot: str) -> str:
    """Raise ValidationError unless timeslot is a known slot."""
    if timeslot not in TIMESLOTS:
        raise ValidationError(get_message('invalid_timeslot', timeslot=timeslot))
    return timeslot


# =============================================================================
# AVAILABILITY
# =============================================================================

def calculate_availability(
    settings: InventorySettings,
    reservations: list,
    exclude_reservation_id: int = None
) -> dict:
    """
    Compute remaining canoes per slot from a day's reservations.

    Only pending and on_water reservations consume capacity. Remaining counts
    never go below zero even when the day is already overbooked.

    Args:
        settings: Inventory totals
        reservations: Reservations of a single date (dicts)
        exclude_reservation_id: Reservation whose canoes are counted as free

    Returns:
        dict: {
            'morning': {'single': int, 'double': int,
                        'total_single': int, 'total_double': int},
            'afternoon': {...},
            'full_day': {...}
        }
    """
    used = {
        'morning': {'single': 0, 'double': 0},
        'afternoon': {'single': 0, 'double': 0},
    }
    excluded = None

    for res in reservations:
        if res.get('status') not in ACTIVE_STATUSES:
            continue
        if exclude_reservation_id is not None and res.get('id') == exclude_reservation_id:
            excluded = res
        for half in SLOT_HALVES.get(res.get('timeslot'), ()):
            used[half]['single'] += res.get('single_canoes') or 0
            used[half]['double'] += res.get('double_canoes') or 0

    total_single = settings.total_single_canoes
    total_double = settings.total_double_canoes

    result = {}
    for half in ('morning', 'afternoon'):
        result[half] = {
            'single': max(0, total_single - used[half]['single']),
            'double': max(0, total_double - used[half]['double']),
            'total_single': total_single,
            'total_double': total_double,
        }

    # Excluded canoes are added back after flooring
    if excluded is not None:
        for half in SLOT_HALVES.get(excluded.get('timeslot'), ()):
            result[half]['single'] += excluded.get('single_canoes') or 0
            result[half]['double'] += excluded.get('double_canoes') or 0

    result['full_day'] = {
        'single': min(result['morning']['single'], result['afternoon']['single']),
        'double': min(result['morning']['double'], result['afternoon']['double']),
        'total_single': total_single,
        'total_double': total_double,
    }

    return result


def get_reservations_for_date(date: str) -> list:
    """
    Get every reservation of a date, any status.

    Args:
        date: Date (YYYY-MM-DD)

    Returns:
        list: Reservation dicts
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT * FROM reservations
        WHERE date = ?
        ORDER BY arrival_time ASC, id ASC
    ''', (date,))
    return [dict(row) for row in cursor.fetchall()]


def get_availability(date: str, settings: InventorySettings = None,
                     exclude_reservation_id: int = None) -> dict:
    """
    Availability of every slot on a date.

    Args:
        date: Date (YYYY-MM-DD)
        settings: Pre-loaded settings (loaded from the store if omitted)
        exclude_reservation_id: Reservation whose consumption is ignored

    Returns:
        dict: Same shape as calculate_availability()

    Raises:
        ValidationError: Malformed date
        ConfigurationError: Settings row missing
    """
    if not validate_date_format(date):
        raise ValidationError(get_message('invalid_date'))

    if settings is None:
        settings = get_settings()

    return calculate_availability(
        settings, get_reservations_for_date(date), exclude_reservation_id
    )


# =============================================================================
# OVERBOOKING
# =============================================================================

def _describe_excess(excess_single: int, excess_double: int) -> str:
    issues = []
    if excess_single > 0:
        issues.append(f'{excess_single} extra single canoe(s)')
    if excess_double > 0:
        issues.append(f'{excess_double} extra double canoe(s)')
    return ', '.join(issues)


def check_overbooking(
    date: str,
    timeslot: str,
    single_canoes: int,
    double_canoes: int,
    exclude_reservation_id: int = None,
    settings: InventorySettings = None
) -> dict:
    """
    Check whether a requested allocation fits the remaining fleet.

    Advisory only: nothing is written and overbooking is reported, not
    raised. When editing, pass the reservation's id as
    exclude_reservation_id so its own canoes count as free.

    Args:
        date: Date (YYYY-MM-DD)
        timeslot: 'morning', 'afternoon' or 'full_day'
        single_canoes: Requested single canoes
        double_canoes: Requested double canoes
        exclude_reservation_id: Reservation being edited
        settings: Pre-loaded settings

    Returns:
        dict: {
            'is_overbooked': bool,
            'message': str,
            'remaining': {'single': int, 'double': int}
        }

    Raises:
        ValidationError: Unknown slot, malformed date or negative counts
    """
    validate_timeslot(timeslot)
    single_canoes = coerce_int(single_canoes, 'single_canoes')
    double_canoes = coerce_int(double_canoes, 'double_canoes')
    if single_canoes < 0 or double_canoes < 0:
        raise ValidationError('Canoe counts cannot be negative')

    availability = get_availability(date, settings, exclude_reservation_id)
    slot = availability[timeslot]
    remaining = {'single': slot['single'], 'double': slot['double']}

    excess_single = single_canoes - remaining['single']
    excess_double = double_canoes - remaining['double']
    is_overbooked = excess_single > 0 or excess_double > 0

    message = ''
    if is_overbooked:
        message = get_message(
            'overbooking_detected',
            issues=_describe_excess(excess_single, excess_double)
        ) + f" (remaining: {remaining['single']} single, {remaining['double']} double)"

    return {
        'is_overbooked': is_overbooked,
        'message': message,
        'remaining': remaining,
    }


# =============================================================================
# SUGGESTIONS
# =============================================================================

def suggest_canoe_allocation(nb_people: int) -> dict:
    """
    Fewest canoes seating a group: doubles first, one single for an odd seat.

    Args:
        nb_people: Group size

    Returns:
        dict: {'single': int, 'double': int}
    """
    nb_people = coerce_int(nb_people, 'nb_people')
    if nb_people <= 0:
        return {'single': 0, 'double': 0}
    return {'single': nb_people % 2, 'double': nb_people // 2}
