"""
Daily and period statistics.

Occupancy here is utilization: canoes handed out over the whole fleet,
counted per slot. It is not the headroom computed by the availability
module (no min() across halves).
"""

from utils.errors import ValidationError
from utils.helpers import date_range
from utils.messages import get_message
from utils.validators import validate_date_format
from .reservation_availability import get_reservations_for_date
from .settings import InventorySettings, get_settings


MAX_PERIOD_DAYS = 366

SLOT_MEMBERS = {
    'morning': ('morning', 'full_day'),
    'afternoon': ('afternoon', 'full_day'),
    'full_day': ('full_day',),
}


def compute_daily_stats(date: str, reservations: list, settings: InventorySettings) -> dict:
    """
    Summarize one day from its reservations.

    Args:
        date: Date (YYYY-MM-DD)
        reservations: That day's reservations, any status
        settings: Inventory totals

    Returns:
        dict: {
            'date': str,
            'total_reservations': int,
            'total_people': int,
            'morning_occupancy': float,
            'afternoon_occupancy': float,
            'full_day_occupancy': float
        }
    """
    active = [r for r in reservations if r.get('status') != 'canceled']
    total_canoes = settings.total_canoes

    stats = {
        'date': date,
        'total_reservations': len(active),
        'total_people': sum(r['nb_people'] for r in active),
    }

    for slot, members in SLOT_MEMBERS.items():
        used = sum(
            r['single_canoes'] + r['double_canoes']
            for r in active if r['timeslot'] in members
        )
        stats[f'{slot}_occupancy'] = (used / total_canoes) * 100 if total_canoes > 0 else 0

    return stats


def get_daily_stats(date: str, settings: InventorySettings = None) -> dict:
    """
    Statistics for one date.

    Raises:
        ValidationError: Malformed date
    """
    if not validate_date_format(date):
        raise ValidationError(get_message('invalid_date'))

    if settings is None:
        settings = get_settings()

    return compute_daily_stats(date, get_reservations_for_date(date), settings)


def get_period_stats(end_date: str, days: int = 7, settings: InventorySettings = None) -> dict:
    """
    Statistics for the `days` dates ending at end_date.

    Average occupancy of a day is the mean of its morning and afternoon
    occupancy; the busiest day is the one with the most people (earliest
    wins a tie, None when nobody came).

    Args:
        end_date: Last date of the period (YYYY-MM-DD)
        days: Period length, 1..MAX_PERIOD_DAYS
        settings: Pre-loaded settings

    Returns:
        dict: {
            'start_date', 'end_date', 'days',
            'daily': [daily stats, oldest first],
            'total_reservations', 'total_people',
            'average_occupancy': float,
            'busiest_day': daily stats dict or None
        }
    """
    if not validate_date_format(end_date):
        raise ValidationError(get_message('invalid_date'))
    if not isinstance(days, int) or days < 1 or days > MAX_PERIOD_DAYS:
        raise ValidationError(get_message('invalid_period', max_days=MAX_PERIOD_DAYS))

    if settings is None:
        settings = get_settings()

    dates = date_range(end_date, days)
    daily = [get_daily_stats(day, settings) for day in dates]

    average_occupancy = sum(
        (d['morning_occupancy'] + d['afternoon_occupancy']) / 2 for d in daily
    ) / len(daily)

    busiest_day = None
    for day in daily:
        if day['total_people'] > 0 and (
            busiest_day is None or day['total_people'] > busiest_day['total_people']
        ):
            busiest_day = day

    return {
        'start_date': dates[0],
        'end_date': dates[-1],
        'days': days,
        'daily': daily,
        'total_reservations': sum(d['total_reservations'] for d in daily),
        'total_people': sum(d['total_people'] for d in daily),
        'average_occupancy': average_occupancy,
        'busiest_day': busiest_day,
    }
