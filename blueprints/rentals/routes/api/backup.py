"""
Backup API routes: JSON download of the whole store and restore from it.
"""

from flask import Response, current_app, request

from models.backup import create_backup, import_data
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_local_now
from utils.helpers import backup_filename


def register_routes(bp):
    """Register backup API routes on the blueprint."""

    @bp.route('/backup/export', methods=['GET'])
    def export_backup():
        """Download a backup file and stamp last_backup_date."""
        moment = get_local_now()
        content = create_backup(moment)
        return Response(
            content,
            mimetype='application/json',
            headers={
                'Content-Disposition': f'attachment; filename={backup_filename(moment)}'
            }
        )

    @bp.route('/backup/import', methods=['POST'])
    def import_backup():
        """
        Replace all reservations and client names with a backup.

        Accepts either a multipart upload ('file') or the backup document
        as the JSON body.
        """
        upload = request.files.get('file')
        if upload is not None:
            payload = upload.read().decode('utf-8', errors='replace')
        else:
            payload = request.get_data(as_text=True)

        result = import_data(payload)
        if not result['success']:
            return api_error(result['message'], 400)

        current_app.logger.info('Backup imported from API')
        return api_success(message=result['message'])
