"""
Rentals blueprint initialization.
Assembles the rental JSON API from its route modules:
- routes/api/reservations.py - Reservation CRUD, lifecycle and live board
- routes/api/availability.py - Slot availability and overbooking checks
- routes/api/settings.py - Inventory and schedule settings
- routes/api/statistics.py - Daily/period statistics and Excel export
- routes/api/backup.py - JSON backup export and import
- routes/api/clients.py - Client name autocomplete
"""

from flask import Blueprint

# Create main rentals blueprint
rentals_bp = Blueprint('rentals', __name__)

# =============================================================================
# REGISTER SUB-BLUEPRINTS
# =============================================================================

# API routes (all JSON endpoints)
from blueprints.rentals.routes.api import api_bp
rentals_bp.register_blueprint(api_bp, url_prefix='/api')
