"""
Domain exceptions for the canoe rental core.

Overbooking has no exception: check_overbooking() returns it as a result.
"""


class ConfigurationError(RuntimeError):
    """Inventory settings are missing or unreadable."""


class ValidationError(ValueError):
    """Input rejected before any write. The message names the broken rule."""


class InvalidStatusTransitionError(ValidationError):
    """A guarded lifecycle action was attempted from a disallowed status."""

    def __init__(self, current_status: str, new_status: str, allowed: list):
        self.current_status = current_status
        self.new_status = new_status
        self.allowed = allowed
        allowed_text = ', '.join(allowed) if allowed else 'none'
        super().__init__(
            f"Cannot change status from '{current_status}' to '{new_status}'. "
            f"Allowed transitions: {allowed_text}"
        )


class ReservationNotFoundError(LookupError):
    """No reservation exists with the requested id."""

    def __init__(self, reservation_id: int):
        self.reservation_id = reservation_id
        super().__init__(f'Reservation {reservation_id} not found')


__all__ = [
    'ConfigurationError',
    'ValidationError',
    'InvalidStatusTransitionError',
    'ReservationNotFoundError',
]
