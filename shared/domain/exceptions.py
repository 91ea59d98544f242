"""
Domain Errors

Error taxonomy shared by every bounded context:
- ValidationError: missing, blank or negative input
- NotFound: unknown booking, room, property or user
- InvalidState: transition attempted from the wrong status
- InactiveAccount: the acting account is deactivated
- NotOwner: authorization mismatch (maps to access denied)
- RoomConflict: availability violated at request or accept time
"""

from django.core.exceptions import PermissionDenied


class DomainError(Exception):
    """Base class for all errors raised by the domain layer"""


class ValidationError(DomainError, ValueError):
    """Raised when input is missing, blank, negative or malformed"""


class InvalidRange(ValidationError):
    """Raised when a date range does not satisfy start < end"""


class OutOfWindow(ValidationError):
    """Raised when a requested period is outside the room's availability window"""


class NotFound(DomainError, LookupError):
    """Raised when an entity cannot be found by id"""


class InvalidState(DomainError):
    """Raised when a status transition is not allowed from the current status"""


class InactiveAccount(DomainError):
    """Raised when a deactivated account tries to act"""


class NotOwner(DomainError, PermissionDenied):
    """
    Raised when the actor does not own the booking or the property

    Subclasses Django's PermissionDenied so callers can map it
    to an access-denied response.
    """


class RoomConflict(DomainError):
    """Raised when the requested period overlaps an accepted booking"""

    def __init__(self, message: str, conflicting_ids=()):
        super().__init__(message)
        self.conflicting_ids = tuple(conflicting_ids)
