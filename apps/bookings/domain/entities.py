"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Aggregate representing a student's request for a room
- BookingStatus: FSM states for booking lifecycle
- RejectionReason: Why a booking ended up REJECTED
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Hashable

from shared.domain.base import Aggregate
from shared.domain.exceptions import InvalidState, ValidationError
from shared.domain.value_objects import DateRange


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - REQUESTED -> ACCEPTED (homeowner accepted, room still free)
    - REQUESTED -> REJECTED (homeowner rejected, or conflict found at accept time)
    - REQUESTED/ACCEPTED/REJECTED -> CANCELLED (student cancelled)
    """
    REQUESTED = 'requested'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'
    CANCELLED = 'cancelled'


class RejectionReason(Enum):
    OWNER = 'owner'          # Homeowner declined the request
    CONFLICT = 'conflict'    # Room taken by an accepted booking at accept time


_IMMUTABLE_FIELDS = frozenset({'id', 'student_id', 'room_id', 'period', 'created_at'})


@dataclass(eq=False, kw_only=True)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Represents a student's booking of a room for a period.
    Bookings are never deleted; rejected and cancelled bookings stay as history.

    Key invariants:
    - id, student, room, period and creation time never change
    - status only changes through accept(), reject() and cancel()
    - only ACCEPTED bookings block the room's dates
    """

    student_id: Hashable
    room_id: Hashable
    period: DateRange
    created_at: datetime

    _status: BookingStatus = field(default=BookingStatus.REQUESTED, init=False)
    rejection_reason: RejectionReason | None = field(default=None, init=False)
    status_changed_at: datetime | None = field(default=None, init=False)

    def __post_init__(self):
        if self.student_id is None:
            raise ValidationError("Booking student must not be None")
        if self.room_id is None:
            raise ValidationError("Booking room must not be None")
        if not isinstance(self.period, DateRange):
            raise ValidationError("Booking period must be a DateRange")

    def __setattr__(self, name, value):
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"Booking.{name} cannot be changed")
        super().__setattr__(name, value)

    @classmethod
    def request(cls, booking_id: Hashable, student_id: Hashable, room_id: Hashable,
                period: DateRange, requested_at: datetime) -> 'Booking':
        """
        Create a booking in REQUESTED status

        Events: BookingRequested
        """
        from apps.bookings.domain.events import BookingRequested

        booking = cls(
            id=booking_id,
            student_id=student_id,
            room_id=room_id,
            period=period,
            created_at=requested_at,
        )
        booking.add_event(BookingRequested(
            aggregate_id=booking.id,
            occurred_at=requested_at,
            booking_id=booking.id,
            student_id=student_id,
            room_id=room_id,
            period=period,
        ))
        return booking

    @property
    def status(self) -> BookingStatus:
        return self._status

    def accept(self, at: datetime):
        """
        Accept booking (REQUESTED -> ACCEPTED)

        The caller must have re-checked room availability under the room lock.
        Events: BookingAccepted
        """
        self._require_requested('accept')

        from apps.bookings.domain.events import BookingAccepted

        self._status = BookingStatus.ACCEPTED
        self.status_changed_at = at

        self.add_event(BookingAccepted(
            aggregate_id=self.id,
            occurred_at=at,
            booking_id=self.id,
            room_id=self.room_id,
            period=self.period,
        ))

    def reject(self, reason: RejectionReason, at: datetime):
        """
        Reject booking (REQUESTED -> REJECTED)

        Events: BookingRejected
        """
        self._require_requested('reject')

        from apps.bookings.domain.events import BookingRejected

        self._status = BookingStatus.REJECTED
        self.rejection_reason = reason
        self.status_changed_at = at

        self.add_event(BookingRejected(
            aggregate_id=self.id,
            occurred_at=at,
            booking_id=self.id,
            room_id=self.room_id,
            reason=reason.value,
        ))

    def cancel(self, at: datetime):
        """
        Cancel booking (any status except CANCELLED -> CANCELLED)

        Cancelling an ACCEPTED booking frees the room's dates.
        Events: BookingCancelled
        """
        if self._status == BookingStatus.CANCELLED:
            raise InvalidState(f"Booking {self.id} is already cancelled")

        from apps.bookings.domain.events import BookingCancelled

        old_status = self._status
        self._status = BookingStatus.CANCELLED
        self.status_changed_at = at

        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            occurred_at=at,
            booking_id=self.id,
            room_id=self.room_id,
            old_status=old_status.value,
        ))

    def _require_requested(self, action: str):
        if self._status != BookingStatus.REQUESTED:
            raise InvalidState(
                f"Cannot {action} booking {self.id} from status {self._status.value}. "
                f"Only REQUESTED bookings can be {action}ed."
            )

    @property
    def blocks_dates(self) -> bool:
        """Only ACCEPTED bookings block the room's dates"""
        return self._status == BookingStatus.ACCEPTED

    @property
    def is_cancelled(self) -> bool:
        return self._status == BookingStatus.CANCELLED

    def __str__(self):
        return f"Booking {self.id} ({self._status.value}) room {self.room_id} {self.period}"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, student_id={self.student_id}, room_id={self.room_id}, "
            f"status={self._status.value}, period={self.period!r})"
        )
