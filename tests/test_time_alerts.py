"""
Tests for lateness and slot-boundary alerts.
All checks are pure: reservations are plain dicts and 'now' is explicit.
"""

from datetime import datetime

import pytest

from models.settings import InventorySettings


SETTINGS = InventorySettings()  # 09:00-13:00 / 14:00-18:00
DAY = '2025-06-01'


def _res(status='pending', timeslot='morning', arrival_time='09:00', date=DAY):
    return {
        'id': 1,
        'name': 'Client',
        'date': date,
        'arrival_time': arrival_time,
        'timeslot': timeslot,
        'status': status,
    }


def _at(hour, minute):
    return datetime(2025, 6, 1, hour, minute)


class TestCheckLateness:
    """Tests for check_lateness()."""

    def test_late_by_31_minutes(self):
        """Pending, expected 09:00, now 09:31."""
        from models.time_alerts import check_lateness

        assert check_lateness(_res(), _at(9, 31)) == {'is_late': True, 'late_minutes': 31}

    def test_minutes_are_floored(self):
        """Partial minutes do not count."""
        from models.time_alerts import check_lateness

        now = datetime(2025, 6, 1, 9, 10, 59)
        assert check_lateness(_res(), now)['late_minutes'] == 10

    def test_not_late_at_or_before_arrival(self):
        """Exactly on time is not late."""
        from models.time_alerts import check_lateness

        assert check_lateness(_res(), _at(9, 0))['is_late'] is False
        assert check_lateness(_res(), _at(8, 45))['is_late'] is False

    def test_only_pending(self):
        """Groups already out are never late."""
        from models.time_alerts import check_lateness

        assert check_lateness(_res(status='on_water'), _at(11, 0))['is_late'] is False

    def test_only_today(self):
        """Yesterday's no-show is not reported as late today."""
        from models.time_alerts import check_lateness

        result = check_lateness(_res(date='2025-05-31'), _at(11, 0))
        assert result == {'is_late': False, 'late_minutes': 0}

    def test_aware_now_read_in_configured_timezone(self, app):
        """07:31 UTC is 09:31 in Paris in June."""
        from datetime import timezone
        from models.time_alerts import check_lateness

        with app.app_context():
            now = datetime(2025, 6, 1, 7, 31, tzinfo=timezone.utc)
            assert check_lateness(_res(), now) == {'is_late': True, 'late_minutes': 31}


class TestCheckSlotBoundary:
    """Tests for check_slot_boundary()."""

    def test_morning_overtime_error(self):
        """Morning still out at 14:05 is 65 minutes over: error."""
        from models.time_alerts import check_slot_boundary

        alert = check_slot_boundary(_res(status='on_water'), SETTINGS, _at(14, 5))
        assert alert['type'] == 'overtime_morning'
        assert alert['minutes'] == 65
        assert alert['severity'] == 'error'

    def test_morning_overtime_warning(self):
        """Within the first hour it is a warning."""
        from models.time_alerts import check_slot_boundary

        alert = check_slot_boundary(_res(status='on_water'), SETTINGS, _at(14, 0))
        assert alert['minutes'] == 60
        assert alert['severity'] == 'warning'

    def test_afternoon_overtime_threshold(self):
        """Afternoon overtime becomes an error after 30 minutes."""
        from models.time_alerts import check_slot_boundary

        res = _res(status='on_water', timeslot='afternoon', arrival_time='14:00')
        assert check_slot_boundary(res, SETTINGS, _at(18, 30))['severity'] == 'warning'
        alert = check_slot_boundary(res, SETTINGS, _at(18, 31))
        assert alert['type'] == 'overtime_afternoon'
        assert alert['severity'] == 'error'

    def test_early_afternoon(self):
        """An afternoon group out at 13:20 is 40 minutes early."""
        from models.time_alerts import check_slot_boundary

        res = _res(status='on_water', timeslot='afternoon', arrival_time='14:00')
        alert = check_slot_boundary(res, SETTINGS, _at(13, 20))
        assert alert['type'] == 'early_afternoon'
        assert alert['severity'] == 'warning'
        assert alert['minutes'] == 40
        assert 'before the afternoon slot begins' in alert['message']

    def test_inside_slot_no_alert(self):
        """No alert while inside the slot."""
        from models.time_alerts import check_slot_boundary

        assert check_slot_boundary(_res(status='on_water'), SETTINGS, _at(12, 59)) is None

    def test_full_day_never_flagged(self):
        """Full-day rentals span the whole day."""
        from models.time_alerts import check_slot_boundary

        res = _res(status='on_water', timeslot='full_day')
        assert check_slot_boundary(res, SETTINGS, _at(20, 0)) is None
        assert check_slot_boundary(res, SETTINGS, _at(7, 0)) is None

    @pytest.mark.parametrize('status', ['pending', 'completed', 'canceled'])
    def test_only_on_water(self, status):
        """Only groups on the water get boundary alerts."""
        from models.time_alerts import check_slot_boundary

        assert check_slot_boundary(_res(status=status), SETTINGS, _at(15, 0)) is None

    def test_uses_configured_boundaries(self):
        """A later morning end moves the overtime threshold."""
        from models.time_alerts import check_slot_boundary

        settings = InventorySettings(morning_end='13:30', afternoon_start='14:30')
        alert = check_slot_boundary(_res(status='on_water'), settings, _at(14, 5))
        assert alert['minutes'] == 35
        assert alert['severity'] == 'warning'


class TestAnnotateReservation:
    """Tests for annotate_reservation()."""

    def test_adds_fields_without_mutating(self):
        """The input dict is left unchanged."""
        from models.time_alerts import annotate_reservation

        res = _res()
        annotated = annotate_reservation(res, SETTINGS, _at(9, 45))
        assert annotated['is_late'] is True
        assert annotated['late_minutes'] == 45
        assert annotated['time_alert'] is None
        assert 'is_late' not in res


class TestListReservationsWithAlerts:
    """Tests for the live board query."""

    def test_late_first_then_pending_then_rest(self, app, make_reservation):
        """Sort order of the live board."""
        from models.reservation_queries import list_reservations_with_alerts
        from models.reservation_state import mark_on_water

        out = make_reservation(name='Out Early', arrival_time='08:30')
        make_reservation(name='Later Pending', arrival_time='11:00')
        make_reservation(name='Late One', arrival_time='10:00')

        with app.app_context():
            mark_on_water(out['id'], now=_at(8, 30))
            board = list_reservations_with_alerts(date=DAY, now=_at(10, 20))
            assert [r['name'] for r in board] == ['Late One', 'Later Pending', 'Out Early']
            assert board[0]['late_minutes'] == 20

    def test_late_filter(self, app, make_reservation):
        """status='late' keeps late pending reservations only."""
        from models.reservation_queries import list_reservations_with_alerts

        make_reservation(name='Late One', arrival_time='09:00')
        make_reservation(name='On Time', arrival_time='11:00')

        with app.app_context():
            board = list_reservations_with_alerts(date=DAY, status='late', now=_at(9, 30))
            assert [r['name'] for r in board] == ['Late One']

    def test_search_filter(self, app, make_reservation):
        """Search matches name fragments case-insensitively."""
        from models.reservation_queries import list_reservations_with_alerts

        make_reservation(name='Moreau')
        make_reservation(name='Laurent')

        with app.app_context():
            board = list_reservations_with_alerts(date=DAY, search='mor', now=_at(8, 0))
            assert [r['name'] for r in board] == ['Moreau']

    def test_invalid_status_filter(self, app):
        """Unknown filters are rejected."""
        from models.reservation_queries import list_reservations_with_alerts
        from utils.errors import ValidationError

        with app.app_context():
            with pytest.raises(ValidationError):
                list_reservations_with_alerts(status='lost', now=_at(8, 0))

    def test_status_counts(self, app, make_reservation):
        """Counts include the late pseudo-status."""
        from models.reservation_queries import get_status_counts
        from models.reservation_state import cancel_reservation

        make_reservation(arrival_time='09:00')
        make_reservation(arrival_time='12:00')
        canceled = make_reservation(arrival_time='10:00')

        with app.app_context():
            cancel_reservation(canceled['id'])
            counts = get_status_counts(DAY, now=_at(9, 30))
            assert counts['pending'] == 2
            assert counts['canceled'] == 1
            assert counts['late'] == 1
            assert counts['total'] == 3
