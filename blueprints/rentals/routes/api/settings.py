"""
Settings API routes: canoe inventory and slot schedule.
"""

from flask import current_app, request

from blueprints.rentals.forms import SettingsForm, first_error
from models.settings import get_settings, update_settings
from utils.api_response import api_success, api_error
from utils.messages import get_message


def register_routes(bp):
    """Register settings API routes on the blueprint."""

    @bp.route('/settings', methods=['GET'])
    def settings_detail():
        """Current inventory and schedule."""
        return api_success(data=get_settings().to_dict())

    @bp.route('/settings', methods=['PUT', 'PATCH'])
    def settings_update():
        """
        Update any subset of the settings.

        Request JSON:
        {
            "total_single_canoes": 12, "total_double_canoes": 6,
            "morning_start": "09:00", "morning_end": "13:00",
            "afternoon_start": "14:00", "afternoon_end": "18:00",
            "auto_backup_enabled": true
        }
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return api_error(get_message('json_required'), 400)

        form = SettingsForm()
        if not form.validate():
            return api_error(first_error(form), 400, errors=form.errors)

        settings = update_settings(**form.to_fields(payload))
        current_app.logger.info('Settings saved from API')
        return api_success(data=settings.to_dict(), message=get_message('settings_updated'))
