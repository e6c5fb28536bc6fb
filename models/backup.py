"""
Backup export and import.

Backup file format:

    {
        "version": "1.0",
        "exported_at": "2025-06-01T18:30:00",
        "reservations": [...],
        "settings": {...},
        "client_names": [{"name", "usage_count", "last_used"}, ...]
    }

Import replaces every reservation (with its history) and every client name
in one transaction. Only the two canoe totals are taken from "settings".
"""

import json
import logging
from datetime import datetime

from database import get_db
from utils.datetime_helpers import get_local_now, timestamp
from utils.messages import get_message
from utils.validators import validate_inventory
from .client_name import get_all_client_names
from .reservation_state import normalize_status
from .settings import get_settings, record_backup_date

logger = logging.getLogger(__name__)


BACKUP_VERSION = '1.0'

RESERVATION_COLUMNS = (
    'name', 'date', 'nb_people', 'single_canoes', 'double_canoes',
    'arrival_time', 'timeslot', 'status', 'created_at', 'updated_at',
    'actual_arrival_time', 'departure_time', 'return_time',
)


# =============================================================================
# EXPORT
# =============================================================================

def export_data(now: datetime = None) -> dict:
    """
    Snapshot the whole store.

    Returns:
        dict: Backup document (see module docstring)
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM reservations ORDER BY created_at, id')
    reservations = [dict(row) for row in cursor.fetchall()]

    return {
        'version': BACKUP_VERSION,
        'exported_at': timestamp(now or get_local_now()),
        'reservations': reservations,
        'settings': get_settings().to_dict(),
        'client_names': get_all_client_names(),
    }


def dump_backup(data: dict) -> str:
    """Serialize a backup document the way backup files are written."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def create_backup(now: datetime = None) -> str:
    """
    Export the store as JSON text and stamp last_backup_date.

    Returns:
        str: Backup JSON
    """
    moment = now or get_local_now()
    data = dump_backup(export_data(moment))
    record_backup_date(timestamp(moment))
    logger.info('Backup created (%d bytes)', len(data))
    return data


# =============================================================================
# IMPORT
# =============================================================================

def _parse_backup(payload) -> dict | None:
    """Decode a backup payload; None when it is not a usable document."""
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError:
            return None

    if not isinstance(payload, dict):
        return None
    if not isinstance(payload.get('reservations'), list):
        return None
    return payload


def _reservation_values(reservation: dict) -> tuple:
    values = {column: reservation.get(column) for column in RESERVATION_COLUMNS}
    values['status'] = normalize_status(values['status'] or 'pending')
    values['single_canoes'] = values['single_canoes'] or 0
    values['double_canoes'] = values['double_canoes'] or 0
    values['created_at'] = values['created_at'] or timestamp(get_local_now())
    values['updated_at'] = values['updated_at'] or values['created_at']
    return tuple(values[column] for column in RESERVATION_COLUMNS)


def import_data(payload) -> dict:
    """
    Replace the store contents with a backup.

    A payload without a 'reservations' list is rejected before anything is
    touched. Any failure while writing rolls the whole import back.

    Args:
        payload: Backup JSON text or already decoded dict

    Returns:
        dict: {'success': bool, 'message': str}
    """
    data = _parse_backup(payload)
    if data is None:
        return {'success': False, 'message': get_message('invalid_data_format')}

    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('DELETE FROM reservation_history')
        cursor.execute('DELETE FROM reservations')
        cursor.execute('DELETE FROM client_names')

        columns = ', '.join(RESERVATION_COLUMNS)
        placeholders = ', '.join('?' * len(RESERVATION_COLUMNS))
        for reservation in data['reservations']:
            cursor.execute(
                f'INSERT INTO reservations ({columns}) VALUES ({placeholders})',
                _reservation_values(reservation)
            )

        client_names = data.get('client_names')
        if isinstance(client_names, list):
            for client in client_names:
                cursor.execute('''
                    INSERT INTO client_names (name, usage_count, last_used)
                    VALUES (?, ?, COALESCE(?, CURRENT_TIMESTAMP))
                ''', (client['name'], client.get('usage_count') or 1, client.get('last_used')))

        settings = data.get('settings')
        if isinstance(settings, dict):
            current = get_settings()
            single = settings.get('total_single_canoes', current.total_single_canoes)
            double = settings.get('total_double_canoes', current.total_double_canoes)
            is_valid, error = validate_inventory(int(single), int(double))
            if not is_valid:
                raise ValueError(error)
            cursor.execute('''
                UPDATE settings
                SET total_single_canoes = ?, total_double_canoes = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = 1
            ''', (int(single), int(double)))

        db.commit()

    except Exception as e:
        db.rollback()
        logger.error('Import failed, store left unchanged: %s', e)
        return {'success': False, 'message': get_message('import_failed')}

    logger.info('Imported %d reservation(s)', len(data['reservations']))
    return {'success': True, 'message': get_message('import_success')}
