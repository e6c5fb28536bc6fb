"""
Time anomaly detection for the live board.

Pure functions of (reservation, settings, now). Nothing is stored: alerts
are recomputed on every read.
"""

from datetime import datetime

from utils.datetime_helpers import combine_date_time, minutes_between, to_wall_clock
from utils.helpers import format_duration
from .settings import InventorySettings


# Minutes past the slot end after which overtime becomes an error
MORNING_OVERTIME_ERROR_AFTER = 60
AFTERNOON_OVERTIME_ERROR_AFTER = 30


def _is_today(reservation: dict, now: datetime) -> bool:
    return reservation.get('date') == now.strftime('%Y-%m-%d')


def check_lateness(reservation: dict, now: datetime) -> dict:
    """
    Check whether a pending client is past their arrival time.

    Only pending reservations dated today can be late.

    Args:
        reservation: Reservation dict
        now: Current wall-clock time

    Returns:
        dict: {'is_late': bool, 'late_minutes': int}
    """
    now = to_wall_clock(now)
    result = {'is_late': False, 'late_minutes': 0}

    if reservation.get('status') != 'pending' or not _is_today(reservation, now):
        return result

    expected = combine_date_time(reservation['date'], reservation['arrival_time'])
    if now > expected:
        result['is_late'] = True
        result['late_minutes'] = minutes_between(expected, now)

    return result


def check_slot_boundary(reservation: dict, settings: InventorySettings,
                        now: datetime) -> dict | None:
    """
    Flag an on-water reservation that is outside its slot.

    Rules, first match wins:
        afternoon out before afternoon_start  -> early_afternoon (warning)
        morning still out after morning_end   -> overtime_morning
        afternoon still out after afternoon_end -> overtime_afternoon
    Full-day rentals are never flagged.

    Args:
        reservation: Reservation dict
        settings: Slot boundaries
        now: Current wall-clock time

    Returns:
        dict | None: {'type', 'severity', 'minutes', 'message'} or None
    """
    now = to_wall_clock(now)

    if reservation.get('status') != 'on_water' or not _is_today(reservation, now):
        return None

    timeslot = reservation.get('timeslot')
    day = reservation['date']

    if timeslot == 'afternoon':
        start = combine_date_time(day, settings.afternoon_start)
        if now < start:
            minutes = minutes_between(now, start)
            return {
                'type': 'early_afternoon',
                'severity': 'warning',
                'minutes': minutes,
                'message': (
                    f'On the water {format_duration(minutes)} before '
                    f'the afternoon slot begins'
                ),
            }

    if timeslot == 'morning':
        end = combine_date_time(day, settings.morning_end)
        if now > end:
            minutes = minutes_between(end, now)
            return {
                'type': 'overtime_morning',
                'severity': 'error' if minutes > MORNING_OVERTIME_ERROR_AFTER else 'warning',
                'minutes': minutes,
                'message': f'Morning slot overrun by {format_duration(minutes)}',
            }

    if timeslot == 'afternoon':
        end = combine_date_time(day, settings.afternoon_end)
        if now > end:
            minutes = minutes_between(end, now)
            return {
                'type': 'overtime_afternoon',
                'severity': 'error' if minutes > AFTERNOON_OVERTIME_ERROR_AFTER else 'warning',
                'minutes': minutes,
                'message': f'Afternoon slot overrun by {format_duration(minutes)}',
            }

    return None


def annotate_reservation(reservation: dict, settings: InventorySettings, now: datetime) -> dict:
    """
    Return a copy of the reservation with is_late, late_minutes and time_alert.
    """
    annotated = dict(reservation)
    annotated.update(check_lateness(reservation, now))
    annotated['time_alert'] = check_slot_boundary(reservation, settings, now)
    return annotated
