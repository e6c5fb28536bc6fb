"""
Client name autocomplete route.
"""

from flask import request

from models.client_name import get_client_name_suggestions
from utils.api_response import api_success


def register_routes(bp):
    """Register client API routes on the blueprint."""

    @bp.route('/clients/suggestions', methods=['GET'])
    def client_suggestions():
        """Names containing ?q=, most used first (max 5 unless ?limit=)."""
        query = request.args.get('q', '')
        limit = request.args.get('limit', 5, type=int)
        return api_success(data=get_client_name_suggestions(query, limit=max(1, min(limit, 20))))
