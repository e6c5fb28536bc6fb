"""
Tests for the advisory overbooking check.
Inventory is the seeded default: 10 single, 5 double.
"""

import pytest


class TestCheckOverbooking:
    """check_overbooking() scenarios."""

    def test_empty_day_fits(self, app):
        """5 single + 5 double on an empty day is not overbooked."""
        from models.reservation_availability import check_overbooking

        with app.app_context():
            result = check_overbooking('2025-06-01', 'morning', 5, 5)
            assert result['is_overbooked'] is False
            assert result['message'] == ''
            assert result['remaining'] == {'single': 10, 'double': 5}

    def test_excess_single_reported(self, app, make_reservation):
        """8 single already out in the morning: asking 3 of the 2 left is 1 extra."""
        from models.reservation_availability import check_overbooking

        make_reservation(nb_people=8, single_canoes=8, double_canoes=0)

        with app.app_context():
            result = check_overbooking('2025-06-01', 'morning', 3, 0)
            assert result['is_overbooked'] is True
            assert result['remaining'] == {'single': 2, 'double': 5}
            assert '1 extra single canoe(s)' in result['message']
            assert 'remaining: 2 single, 5 double' in result['message']

    def test_message_cites_two_extra(self, app, make_reservation):
        """Asking for 4 single when 2 remain cites 2 extra."""
        from models.reservation_availability import check_overbooking

        make_reservation(nb_people=8, single_canoes=8, double_canoes=0)

        with app.app_context():
            result = check_overbooking('2025-06-01', 'morning', 4, 0)
            assert result['is_overbooked'] is True
            assert '2 extra single canoe(s)' in result['message']
            assert result['message'].startswith('Overbooking detected:')

    def test_both_types_reported(self, app, make_reservation):
        """Excess of both types is named in one message."""
        from models.reservation_availability import check_overbooking

        make_reservation(nb_people=10, single_canoes=6, double_canoes=2)

        with app.app_context():
            result = check_overbooking('2025-06-01', 'morning', 5, 4)
            assert '1 extra single canoe(s)' in result['message']
            assert '1 extra double canoe(s)' in result['message']

    def test_other_slot_unaffected(self, app, make_reservation):
        """A full morning does not overbook the afternoon."""
        from models.reservation_availability import check_overbooking

        make_reservation(nb_people=10, single_canoes=10, double_canoes=0)

        with app.app_context():
            result = check_overbooking('2025-06-01', 'afternoon', 10, 0)
            assert result['is_overbooked'] is False

    def test_full_day_checks_both_halves(self, app, make_reservation):
        """Full-day requests are limited by the busier half."""
        from models.reservation_availability import check_overbooking

        make_reservation(nb_people=9, single_canoes=9, double_canoes=0, timeslot='afternoon',
                         arrival_time='14:00')

        with app.app_context():
            result = check_overbooking('2025-06-01', 'full_day', 2, 0)
            assert result['is_overbooked'] is True
            assert result['remaining']['single'] == 1

    def test_editing_in_place_never_overbooks_itself(self, app, make_reservation):
        """Re-checking a reservation's own unchanged counts with exclusion passes."""
        from models.reservation_availability import check_overbooking

        reservation = make_reservation(nb_people=10, single_canoes=10, double_canoes=0)

        with app.app_context():
            without_exclusion = check_overbooking('2025-06-01', 'morning', 10, 0)
            assert without_exclusion['is_overbooked'] is True

            result = check_overbooking(
                '2025-06-01', 'morning', 10, 0,
                exclude_reservation_id=reservation['id']
            )
            assert result['is_overbooked'] is False
            assert result['remaining']['single'] == 10

    def test_editing_in_place_on_overbooked_day(self, app, make_reservation):
        """A day forced past the fleet total still accepts an unchanged edit."""
        from models.reservation_availability import check_overbooking

        make_reservation(name='Forced', nb_people=9, single_canoes=9, double_canoes=0)
        edited = make_reservation(name='Edited', nb_people=3, single_canoes=3, double_canoes=0)

        with app.app_context():
            result = check_overbooking(
                '2025-06-01', 'morning', 3, 0,
                exclude_reservation_id=edited['id']
            )
            assert result['is_overbooked'] is False
            assert result['remaining'] == {'single': 3, 'double': 5}

            grown = check_overbooking(
                '2025-06-01', 'morning', 4, 0,
                exclude_reservation_id=edited['id']
            )
            assert grown['is_overbooked'] is True
            assert '1 extra single canoe(s)' in grown['message']

    def test_exclusion_of_full_day_frees_both_halves(self, app, make_reservation):
        """Excluding a full-day booking adds its canoes back to both halves."""
        from models.reservation_availability import check_overbooking

        reservation = make_reservation(
            nb_people=10, single_canoes=0, double_canoes=5, timeslot='full_day'
        )

        with app.app_context():
            result = check_overbooking(
                '2025-06-01', 'afternoon', 0, 5,
                exclude_reservation_id=reservation['id']
            )
            assert result['is_overbooked'] is False

    def test_exclusion_of_other_date_has_no_effect(self, app, make_reservation):
        """Excluding a reservation from another day changes nothing."""
        from models.reservation_availability import check_overbooking

        make_reservation(nb_people=10, single_canoes=10, double_canoes=0)
        other = make_reservation(date='2025-06-02', nb_people=4, single_canoes=4,
                                 double_canoes=0)

        with app.app_context():
            result = check_overbooking(
                '2025-06-01', 'morning', 1, 0, exclude_reservation_id=other['id']
            )
            assert result['is_overbooked'] is True

    def test_canceled_reservations_do_not_count(self, app, make_reservation):
        """Canceling frees the slot."""
        from models.reservation_availability import check_overbooking
        from models.reservation_state import cancel_reservation

        reservation = make_reservation(nb_people=10, single_canoes=10, double_canoes=0)

        with app.app_context():
            cancel_reservation(reservation['id'])
            result = check_overbooking('2025-06-01', 'morning', 10, 0)
            assert result['is_overbooked'] is False

    def test_check_does_not_write(self, app):
        """The check is read-only."""
        from database import get_db
        from models.reservation_availability import check_overbooking

        with app.app_context():
            check_overbooking('2025-06-01', 'morning', 50, 50)
            count = get_db().execute('SELECT COUNT(*) FROM reservations').fetchone()[0]
            assert count == 0

    def test_unknown_timeslot_rejected(self, app):
        """An unknown slot is a validation error, not a silent pass."""
        from models.reservation_availability import check_overbooking
        from utils.errors import ValidationError

        with app.app_context():
            with pytest.raises(ValidationError):
                check_overbooking('2025-06-01', 'evening', 1, 0)

    def test_negative_counts_rejected(self, app):
        """Negative requests are invalid."""
        from models.reservation_availability import check_overbooking
        from utils.errors import ValidationError

        with app.app_context():
            with pytest.raises(ValidationError):
                check_overbooking('2025-06-01', 'morning', -1, 0)
