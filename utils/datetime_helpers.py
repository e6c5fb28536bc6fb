"""Timezone-aware date/time helpers for the canoe rental application."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'Europe/Paris')
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def get_local_now() -> datetime:
    """Current wall-clock time as a naive datetime, comparable to stored dates and times."""
    return get_now().replace(tzinfo=None)


def to_wall_clock(moment: datetime) -> datetime:
    """
    Express a moment as naive local wall-clock time.

    Aware datetimes are converted to the configured timezone first; naive
    ones are taken as already local.
    """
    if moment.tzinfo is not None:
        return moment.astimezone(get_timezone()).replace(tzinfo=None)
    return moment


def combine_date_time(date_str: str, time_str: str) -> datetime:
    """Build a naive datetime from 'YYYY-MM-DD' and 'HH:MM'."""
    return datetime.strptime(f'{date_str} {time_str}', '%Y-%m-%d %H:%M')


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed from start to end (floored)."""
    return int((end - start).total_seconds() // 60)


def timestamp(moment: datetime) -> str:
    """Serialize a moment the way lifecycle timestamps are stored."""
    return moment.isoformat(timespec='seconds')
