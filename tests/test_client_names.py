"""
Tests for the client name autocomplete index.
"""


class TestClientNames:
    """Tests for update_client_name() and get_client_name_suggestions()."""

    def test_upsert_counts_uses(self, app):
        """Recording the same name twice increments its counter."""
        from models.client_name import update_client_name, get_all_client_names

        with app.app_context():
            update_client_name('Roux')
            update_client_name('Roux')
            names = get_all_client_names()
            assert len(names) == 1
            assert names[0]['usage_count'] == 2

    def test_blank_names_ignored(self, app):
        """Empty names are not indexed."""
        from models.client_name import update_client_name, get_all_client_names

        with app.app_context():
            update_client_name('   ')
            assert get_all_client_names() == []

    def test_suggestions_ranked_by_usage(self, app):
        """Most used names come first."""
        from models.client_name import update_client_name, get_client_name_suggestions

        with app.app_context():
            update_client_name('Martin Paul')
            for _ in range(3):
                update_client_name('Martine Roux')

            assert get_client_name_suggestions('mart') == ['Martine Roux', 'Martin Paul']

    def test_suggestions_limited(self, app):
        """At most five suggestions by default."""
        from models.client_name import update_client_name, get_client_name_suggestions

        with app.app_context():
            for i in range(8):
                update_client_name(f'Client {i}')
            assert len(get_client_name_suggestions('Client')) == 5
            assert len(get_client_name_suggestions('Client', limit=2)) == 2

    def test_empty_query(self, app):
        """No query, no suggestions."""
        from models.client_name import get_client_name_suggestions

        with app.app_context():
            assert get_client_name_suggestions('') == []

    def test_rename_records_new_name(self, app, make_reservation):
        """Updating a reservation's name indexes the new name."""
        from models.client_name import get_client_name_suggestions
        from models.reservation_crud import update_reservation

        reservation = make_reservation(name='Old Name')

        with app.app_context():
            update_reservation(reservation['id'], name='Bernard')
            assert get_client_name_suggestions('Bern') == ['Bernard']
