"""
Inventory and schedule settings.
Single-row table (id = 1) read once per operation and passed to calculators.
"""

import logging
from dataclasses import dataclass, asdict, replace

from database import get_db
from utils.errors import ConfigurationError, ValidationError
from utils.validators import (
    coerce_int, normalize_time, validate_inventory, validate_schedule
)

logger = logging.getLogger(__name__)


SCHEDULE_FIELDS = ('morning_start', 'morning_end', 'afternoon_start', 'afternoon_end')
INVENTORY_FIELDS = ('total_single_canoes', 'total_double_canoes')
EDITABLE_FIELDS = INVENTORY_FIELDS + SCHEDULE_FIELDS + ('auto_backup_enabled',)


@dataclass(frozen=True)
class InventorySettings:
    """Canoe fleet and slot boundaries."""

    total_single_canoes: int = 10
    total_double_canoes: int = 5
    morning_start: str = '09:00'
    morning_end: str = '13:00'
    afternoon_start: str = '14:00'
    afternoon_end: str = '18:00'
    auto_backup_enabled: bool = True
    last_backup_date: str | None = None

    @classmethod
    def from_row(cls, row) -> 'InventorySettings':
        data = dict(row)
        return cls(
            total_single_canoes=data['total_single_canoes'] or 0,
            total_double_canoes=data['total_double_canoes'] or 0,
            morning_start=data.get('morning_start') or cls.morning_start,
            morning_end=data.get('morning_end') or cls.morning_end,
            afternoon_start=data.get('afternoon_start') or cls.afternoon_start,
            afternoon_end=data.get('afternoon_end') or cls.afternoon_end,
            auto_backup_enabled=bool(data.get('auto_backup_enabled', 1)),
            last_backup_date=data.get('last_backup_date'),
        )

    @property
    def total_canoes(self) -> int:
        return self.total_single_canoes + self.total_double_canoes

    def to_dict(self) -> dict:
        return asdict(self)


def get_settings() -> InventorySettings:
    """
    Load the settings row.

    Returns:
        InventorySettings

    Raises:
        ConfigurationError: If the settings row is missing
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM settings WHERE id = 1')
    row = cursor.fetchone()
    if row is None:
        raise ConfigurationError('Inventory settings are missing. Run "flask init-db".')
    return InventorySettings.from_row(row)


def validate_settings(settings: InventorySettings) -> None:
    """
    Check inventory totals and slot boundaries.

    Raises:
        ValidationError: Naming the first broken rule
    """
    is_valid, error = validate_inventory(
        settings.total_single_canoes, settings.total_double_canoes
    )
    if not is_valid:
        raise ValidationError(error)

    is_valid, error = validate_schedule(
        settings.morning_start, settings.morning_end,
        settings.afternoon_start, settings.afternoon_end
    )
    if not is_valid:
        raise ValidationError(error)


def update_settings(**fields) -> InventorySettings:
    """
    Update settings fields.

    Values are merged with the stored row and the whole result is validated
    before anything is written. Times are stored zero-padded.

    Args:
        **fields: Any of EDITABLE_FIELDS

    Returns:
        InventorySettings: The saved settings

    Raises:
        ValidationError: Unknown field or invalid value
    """
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown settings field(s): {', '.join(sorted(unknown))}")

    changes = {}
    for field, value in fields.items():
        if value is None:
            continue
        if field in INVENTORY_FIELDS:
            changes[field] = coerce_int(value, field)
        elif field in SCHEDULE_FIELDS:
            changes[field] = normalize_time(value)
        else:
            changes[field] = bool(value)

    current = get_settings()
    updated = replace(current, **changes)
    validate_settings(updated)

    if not changes:
        return current

    db = get_db()
    cursor = db.cursor()

    try:
        values = [int(v) if isinstance(v, bool) else v for v in changes.values()]
        set_clause = ', '.join(f'{field} = ?' for field in changes)
        cursor.execute(f'''
            UPDATE settings
            SET {set_clause}, updated_at = CURRENT_TIMESTAMP
            WHERE id = 1
        ''', values)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info('Settings updated: %s', changes)
    return updated


def record_backup_date(moment: str) -> None:
    """Stamp last_backup_date on the settings row."""
    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('''
            UPDATE settings SET last_backup_date = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = 1
        ''', (moment,))
        db.commit()
    except Exception:
        db.rollback()
        raise
