"""
Availability API routes: remaining canoes per slot, overbooking check and
canoe allocation suggestion.
"""

from flask import request

from models.reservation import check_overbooking, get_availability, suggest_canoe_allocation
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today
from utils.messages import get_message


def register_routes(bp):
    """Register availability API routes on the blueprint."""

    @bp.route('/availability', methods=['GET'])
    def availability():
        """
        Remaining canoes for each slot of a date.

        Query params:
            date: YYYY-MM-DD (defaults to today)
            exclude_id: Reservation being edited

        Response JSON:
        {
            "success": true,
            "date": "2025-06-01",
            "data": {
                "morning": {"single": 5, "double": 5, "total_single": 10, "total_double": 5},
                "afternoon": {...},
                "full_day": {...}
            }
        }
        """
        date_str = request.args.get('date') or get_today().strftime('%Y-%m-%d')
        exclude_id = request.args.get('exclude_id', type=int)
        return api_success(
            data=get_availability(date_str, exclude_reservation_id=exclude_id),
            date=date_str
        )

    @bp.route('/availability/check', methods=['POST'])
    def check():
        """
        Advisory overbooking check.

        Request JSON:
        {
            "date": "2025-06-01", "timeslot": "morning",
            "single_canoes": 3, "double_canoes": 0,
            "exclude_reservation_id": 12
        }
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return api_error(get_message('json_required'), 400)

        if not payload.get('date'):
            return api_error(get_message('date_required'), 400)

        result = check_overbooking(
            payload['date'],
            payload.get('timeslot'),
            payload.get('single_canoes', 0),
            payload.get('double_canoes', 0),
            exclude_reservation_id=payload.get('exclude_reservation_id')
        )
        return api_success(data=result)

    @bp.route('/availability/suggest', methods=['GET'])
    def suggest():
        """Fewest canoes for a group (?people=)."""
        people = request.args.get('people', 0, type=int)
        return api_success(data=suggest_canoe_allocation(people))
