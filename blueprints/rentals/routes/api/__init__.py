"""
Rentals API routes package.
Split into smaller modules by entity for maintainability.
"""

from flask import Blueprint

# Create the API blueprint
api_bp = Blueprint('rentals_api', __name__)

# Import and register routes from submodules
from blueprints.rentals.routes.api import availability
from blueprints.rentals.routes.api import backup
from blueprints.rentals.routes.api import clients
from blueprints.rentals.routes.api import reservations
from blueprints.rentals.routes.api import settings
from blueprints.rentals.routes.api import statistics

# Register all route functions on the blueprint
availability.register_routes(api_bp)
backup.register_routes(api_bp)
clients.register_routes(api_bp)
reservations.register_routes(api_bp)
settings.register_routes(api_bp)
statistics.register_routes(api_bp)
