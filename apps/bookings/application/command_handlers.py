"""
Booking Command Handlers

Id-based entry points for the booking lifecycle, dispatched through
the message bus. Handlers resolve ids into accounts and rooms and
delegate to BookingLifecycle.

Commands:
- RequestBookingCommand: Student requests a room
- AcceptBookingCommand: Homeowner accepts a request
- RejectBookingCommand: Homeowner rejects a request
- CancelBookingCommand: Student cancels a booking
"""

from dataclasses import dataclass
from datetime import date
from typing import Hashable
import logging

from apps.bookings.application.lifecycle import BookingLifecycle
from apps.bookings.application.ports import ListingLookup
from apps.bookings.domain.entities import Booking
from apps.users.repositories import InMemoryUserRepository
from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass(frozen=True)
class RequestBookingCommand:
    """Command to request a room for [start, end)"""
    student_id: Hashable
    room_id: Hashable
    start: date
    end: date


@dataclass(frozen=True)
class AcceptBookingCommand:
    homeowner_id: Hashable
    booking_id: Hashable


@dataclass(frozen=True)
class RejectBookingCommand:
    homeowner_id: Hashable
    booking_id: Hashable


@dataclass(frozen=True)
class CancelBookingCommand:
    student_id: Hashable
    booking_id: Hashable


# ===== Command Handlers =====

class _LifecycleHandler:
    def __init__(self, lifecycle: BookingLifecycle, users: InMemoryUserRepository):
        self.lifecycle = lifecycle
        self.users = users

    def __call__(self, command) -> Booking:
        return self.handle(command)


class RequestBookingHandler(_LifecycleHandler):
    """
    Handler for RequestBooking command

    Builds the DateRange from raw dates, so malformed ranges fail
    with InvalidRange before anything else is looked up.
    """

    def __init__(self, lifecycle: BookingLifecycle, users: InMemoryUserRepository,
                 listings: ListingLookup):
        super().__init__(lifecycle, users)
        self.listings = listings

    def handle(self, command: RequestBookingCommand) -> Booking:
        period = DateRange(command.start, command.end)
        student = self.users.get(command.student_id)
        room = self.listings.get_room(command.room_id)
        return self.lifecycle.request_booking(student, room, period)


class AcceptBookingHandler(_LifecycleHandler):
    def handle(self, command: AcceptBookingCommand) -> Booking:
        homeowner = self.users.get(command.homeowner_id)
        return self.lifecycle.accept_booking(homeowner, command.booking_id)


class RejectBookingHandler(_LifecycleHandler):
    def handle(self, command: RejectBookingCommand) -> Booking:
        homeowner = self.users.get(command.homeowner_id)
        return self.lifecycle.reject_booking(homeowner, command.booking_id)


class CancelBookingHandler(_LifecycleHandler):
    def handle(self, command: CancelBookingCommand) -> Booking:
        student = self.users.get(command.student_id)
        return self.lifecycle.cancel_booking(student, command.booking_id)
