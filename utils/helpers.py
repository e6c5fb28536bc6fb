"""
Miscellaneous utility helper functions.
Provides common functionality used across the application.
"""

from datetime import datetime, timedelta


def format_duration(minutes: int) -> str:
    """
    Format a duration the way the live board shows it.

    Examples: 45 -> '45m', 60 -> '1h', 65 -> '1h05'

    Args:
        minutes: Duration in whole minutes

    Returns:
        Compact duration string
    """
    if minutes < 60:
        return f'{minutes}m'
    hours, rest = divmod(minutes, 60)
    return f'{hours}h{rest:02d}' if rest else f'{hours}h'


def date_range(end_date: str, days: int) -> list:
    """
    List the `days` calendar dates ending at end_date (inclusive), oldest first.

    Args:
        end_date: Last date (YYYY-MM-DD)
        days: Number of days

    Returns:
        List of YYYY-MM-DD strings
    """
    end = datetime.strptime(end_date, '%Y-%m-%d')
    return [
        (end - timedelta(days=offset)).strftime('%Y-%m-%d')
        for offset in range(days - 1, -1, -1)
    ]


def backup_filename(moment: datetime, extension: str = 'json') -> str:
    """
    Build a timestamped backup file name.

    Args:
        moment: Time of the backup
        extension: File extension without dot

    Returns:
        e.g. 'canoe_backup_2025-06-01_18-30.json'
    """
    return f"canoe_backup_{moment.strftime('%Y-%m-%d_%H-%M')}.{extension}"
