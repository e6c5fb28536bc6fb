"""
API routes for service-level JSON endpoints.
Health check and CSRF token for API clients.
"""

from flask import Blueprint, current_app, jsonify
from flask_wtf.csrf import generate_csrf

from database import is_initialized

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint.

    Returns:
        JSON with status, version and whether the store is initialized
    """
    return jsonify({
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'Canoe Rental Manager'),
        'database': 'ready' if is_initialized() else 'not_initialized'
    })


@api_bp.route('/csrf-token')
def csrf_token():
    """
    Issue a CSRF token for JSON clients.

    Send it back in the X-CSRFToken header on POST/PUT/PATCH/DELETE.
    """
    return jsonify({'csrf_token': generate_csrf()})
