"""
Reservation API routes: CRUD, lifecycle actions, history and the live board.

Create and update re-run the overbooking check right before writing. An
overbooked request is answered with 409 and the check result unless the
payload carries "force": true, in which case it is saved with a warning.
"""

from flask import current_app, request

from blueprints.rentals.forms import ReservationForm, first_error
from models.reservation import (
    cancel_reservation, check_overbooking, create_reservation,
    delete_reservation, duplicate_reservation, force_set_status,
    get_live_reservations, get_reservation, get_reservation_history,
    get_status_counts, list_reservations_with_alerts, mark_completed,
    mark_on_water, search_reservations, update_reservation
)
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today
from utils.messages import get_message


OVERBOOKING_FIELDS = ('date', 'timeslot', 'single_canoes', 'double_canoes')


def _overbooking_response(check: dict):
    """409 answer asking the caller to confirm an overbooked request."""
    return api_error(
        check['message'],
        409,
        overbooking=check,
        hint=get_message('overbooking_confirm')
    )


def _is_forced(payload: dict) -> bool:
    return payload.get('force') is True


def register_routes(bp):
    """Register reservation API routes on the blueprint."""

    # ============================================================================
    # LIST / LIVE BOARD
    # ============================================================================

    @bp.route('/reservations', methods=['GET'])
    def list_reservations():
        """
        List reservations with lateness and slot alerts.

        Query params:
            date: YYYY-MM-DD (optional, all dates if omitted)
            status: pending | on_water | completed | canceled | late
            search: Name fragment
        """
        reservations = list_reservations_with_alerts(
            date=request.args.get('date') or None,
            status=request.args.get('status') or None,
            search=request.args.get('search') or None,
        )
        return api_success(data=reservations, count=len(reservations))

    @bp.route('/reservations/search', methods=['GET'])
    def search():
        """Search reservations by name or date fragment (?q=)."""
        results = search_reservations(request.args.get('q', ''))
        return api_success(data=results, count=len(results))

    @bp.route('/reservations/live', methods=['GET'])
    def live_board():
        """Reservations of a date grouped by pending / on_water / completed."""
        date_str = request.args.get('date') or get_today().strftime('%Y-%m-%d')
        return api_success(data=get_live_reservations(date_str), date=date_str)

    @bp.route('/reservations/counts', methods=['GET'])
    def status_counts():
        """Per-status counts (plus late) for a date."""
        date_str = request.args.get('date') or get_today().strftime('%Y-%m-%d')
        return api_success(data=get_status_counts(date_str), date=date_str)

    # ============================================================================
    # CRUD
    # ============================================================================

    @bp.route('/reservations/<int:reservation_id>', methods=['GET'])
    def reservation_detail(reservation_id):
        """Get one reservation."""
        return api_success(data=get_reservation(reservation_id))

    @bp.route('/reservations', methods=['POST'])
    def create():
        """
        Create a reservation.

        Request JSON:
        {
            "name": "Martin", "date": "2025-06-01", "arrival_time": "09:30",
            "nb_people": 3, "single_canoes": 1, "double_canoes": 1,
            "timeslot": "morning", "force": false
        }
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return api_error(get_message('json_required'), 400)

        form = ReservationForm()
        if not form.validate():
            return api_error(first_error(form), 400, errors=form.errors)

        fields = form.to_fields()
        check = check_overbooking(
            fields['date'], fields['timeslot'],
            fields['single_canoes'], fields['double_canoes']
        )
        if check['is_overbooked'] and not _is_forced(payload):
            return _overbooking_response(check)

        reservation = create_reservation(**fields)

        warning = None
        if check['is_overbooked']:
            warning = get_message('overbooking_forced', details=check['message'])
            current_app.logger.warning(
                'Reservation %s created despite overbooking: %s',
                reservation['id'], check['message']
            )

        return api_success(
            data=reservation,
            message=get_message('reservation_created'),
            warning=warning,
            status=201
        )

    @bp.route('/reservations/<int:reservation_id>', methods=['PUT', 'PATCH'])
    def update(reservation_id):
        """
        Update reservation fields (partial).

        Changing date, slot or canoe counts re-checks overbooking with the
        reservation's own canoes counted as free.
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return api_error(get_message('json_required'), 400)

        fields = {k: v for k, v in payload.items() if k != 'force'}

        check = None
        if any(field in fields for field in OVERBOOKING_FIELDS):
            current = get_reservation(reservation_id)
            merged = {field: fields.get(field, current[field]) for field in OVERBOOKING_FIELDS}
            check = check_overbooking(
                merged['date'], merged['timeslot'],
                merged['single_canoes'], merged['double_canoes'],
                exclude_reservation_id=reservation_id
            )
            if check['is_overbooked'] and not _is_forced(payload):
                return _overbooking_response(check)

        reservation = update_reservation(reservation_id, **fields)

        warning = None
        if check and check['is_overbooked']:
            warning = get_message('overbooking_forced', details=check['message'])
            current_app.logger.warning(
                'Reservation %s updated despite overbooking: %s',
                reservation_id, check['message']
            )

        return api_success(
            data=reservation,
            message=get_message('reservation_updated'),
            warning=warning
        )

    @bp.route('/reservations/<int:reservation_id>', methods=['DELETE'])
    def delete(reservation_id):
        """Delete a reservation and its history."""
        delete_reservation(reservation_id)
        return api_success(message=get_message('reservation_deleted'))

    @bp.route('/reservations/<int:reservation_id>/duplicate', methods=['POST'])
    def duplicate(reservation_id):
        """Copy a reservation as a new pending one."""
        copy = duplicate_reservation(reservation_id)
        return api_success(
            data=copy,
            message=get_message('reservation_duplicated'),
            status=201
        )

    # ============================================================================
    # LIFECYCLE
    # ============================================================================

    @bp.route('/reservations/<int:reservation_id>/on-water', methods=['POST'])
    def on_water(reservation_id):
        """Mark the group as out on the water."""
        reservation = mark_on_water(reservation_id)
        return api_success(data=reservation, message=get_message('reservation_on_water'))

    @bp.route('/reservations/<int:reservation_id>/complete', methods=['POST'])
    def complete(reservation_id):
        """Mark the canoes as returned."""
        reservation = mark_completed(reservation_id)
        return api_success(data=reservation, message=get_message('reservation_completed'))

    @bp.route('/reservations/<int:reservation_id>/cancel', methods=['POST'])
    def cancel(reservation_id):
        """Cancel a pending or on-water reservation."""
        reservation = cancel_reservation(reservation_id)
        return api_success(data=reservation, message=get_message('reservation_canceled'))

    @bp.route('/reservations/<int:reservation_id>/status', methods=['POST'])
    def set_status(reservation_id):
        """
        Corrective status override, bypassing the lifecycle rules.

        Request JSON: {"status": "pending"}
        """
        payload = request.get_json(silent=True) or {}
        status = payload.get('status')
        if not status:
            return api_error(get_message('invalid_status', status=status), 400)

        reservation = force_set_status(reservation_id, status)
        return api_success(
            data=reservation,
            message=get_message('status_forced', status=reservation['status'])
        )

    @bp.route('/reservations/<int:reservation_id>/history', methods=['GET'])
    def history(reservation_id):
        """Field change history, newest first."""
        get_reservation(reservation_id)
        entries = get_reservation_history(reservation_id)
        return api_success(data=entries, count=len(entries))
