"""
Reservation data access functions.
Handles reservation CRUD operations, lifecycle, availability and the live
board.

This module re-exports all functions from the split modules:
- reservation_state.py: Status lifecycle and history
- reservation_crud.py: Create, read, update, duplicate, delete
- reservation_queries.py: Listing, search and the live board
- reservation_availability.py: Slot availability and overbooking
"""

# =============================================================================
# RE-EXPORTS
# =============================================================================

# State management
from .reservation_state import (
    # Constants
    STATUSES,
    ACTIVE_STATUSES,
    VALID_TRANSITIONS,
    # Transitions
    validate_status_transition,
    mark_on_water,
    mark_completed,
    cancel_reservation,
    force_set_status,
    # History
    get_reservation_history,
)

# CRUD operations
from .reservation_crud import (
    create_reservation,
    get_reservation,
    update_reservation,
    duplicate_reservation,
    delete_reservation,
)

# Queries
from .reservation_queries import (
    get_reservations,
    search_reservations,
    get_reservations_by_status,
    get_live_reservations,
    list_reservations_with_alerts,
    get_status_counts,
)

# Availability
from .reservation_availability import (
    TIMESLOTS,
    calculate_availability,
    get_availability,
    check_overbooking,
    suggest_canoe_allocation,
)


__all__ = [
    # Constants
    'STATUSES',
    'ACTIVE_STATUSES',
    'VALID_TRANSITIONS',
    'TIMESLOTS',
    # State
    'validate_status_transition',
    'mark_on_water',
    'mark_completed',
    'cancel_reservation',
    'force_set_status',
    'get_reservation_history',
    # CRUD
    'create_reservation',
    'get_reservation',
    'update_reservation',
    'duplicate_reservation',
    'delete_reservation',
    # Queries
    'get_reservations',
    'search_reservations',
    'get_reservations_by_status',
    'get_live_reservations',
    'list_reservations_with_alerts',
    'get_status_counts',
    # Availability
    'calculate_availability',
    'get_availability',
    'check_overbooking',
    'suggest_canoe_allocation',
]
