"""
Rentals shell

Line-oriented front end over the booking lifecycle. Each input line is
one command; results and domain errors are rendered as text so the
session keeps going after a failed operation.
"""

from __future__ import annotations

import inspect
import logging
import shlex
from datetime import date
from typing import Hashable, Iterable
from uuid import UUID

from apps.bookings.application.command_handlers import (
    AcceptBookingCommand,
    CancelBookingCommand,
    RejectBookingCommand,
    RequestBookingCommand,
)
from apps.bookings.bootstrap import RentalSystem
from apps.bookings.domain.entities import Booking
from apps.properties.domain.entities import Property, Room, RoomType
from apps.users.domain.entities import Admin, Homeowner, Student
from shared.domain.exceptions import DomainError, ValidationError
from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Commands:
  request <student_id> <room_id> <start> <end>   request a room for [start, end)
  accept <homeowner_id> <booking_id>             accept a booking request
  reject <homeowner_id> <booking_id>             reject a booking request
  cancel <student_id> <booking_id>               cancel a booking
  bookings <user_id>                             bookings of a student or homeowner
  pending <homeowner_id>                         requests waiting for a decision
  free <room_id> <start> <end>                   is the room free for [start, end)
  rooms                                          list properties and their rooms
  search [city=X] [type=T] [min=N] [max=N] [from=D to=D]
                                                 find rooms; with dates, shows free/taken
  users                                          list users
  deactivate <admin_id> <user_id>                deactivate an account
  help                                           show this text
  quit                                           leave the shell
Dates use YYYY-MM-DD."""


def parse_id(token: str) -> Hashable:
    if token.isdigit():
        return int(token)
    try:
        return UUID(token)
    except ValueError:
        raise ValidationError(f"Invalid id: {token}") from None


def parse_date(token: str) -> date:
    try:
        return date.fromisoformat(token)
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {token}") from None


SEARCH_KEYS = ('city', 'type', 'min', 'max', 'from', 'to')


def parse_search_criteria(tokens: Iterable[str]) -> dict:
    """Turn key=value tokens (city, type, min, max, from, to) into search_rooms keywords."""
    raw = {}
    for token in tokens:
        key, sep, value = token.partition('=')
        key = key.lower()
        if not sep or key not in SEARCH_KEYS or not value:
            raise ValidationError(f"Invalid search criterion: {token} (use {', '.join(SEARCH_KEYS)} as key=value)")
        raw[key] = value

    filters = {}
    if 'city' in raw:
        filters['city'] = raw['city']
    if 'type' in raw:
        try:
            filters['room_type'] = RoomType(raw['type'].lower())
        except ValueError:
            choices = ', '.join(t.value for t in RoomType)
            raise ValidationError(f"Unknown room type: {raw['type']} (one of {choices})") from None
    for key, name in (('min', 'min_rent'), ('max', 'max_rent')):
        if key in raw:
            if not raw[key].isdigit():
                raise ValidationError(f"Rent must be a whole number: {raw[key]}")
            filters[name] = int(raw[key])
    if ('from' in raw) != ('to' in raw):
        raise ValidationError("Give both from= and to= to search by dates")
    if 'from' in raw:
        filters['period'] = DateRange(parse_date(raw['from']), parse_date(raw['to']))
    return filters


def render_booking(booking: Booking) -> str:
    line = (
        f"#{booking.id} room {booking.room_id} student {booking.student_id} "
        f"{booking.period} {booking.status.value.upper()}"
    )
    if booking.rejection_reason is not None:
        line += f" ({booking.rejection_reason.value})"
    return line


def seed_demo_data(system: RentalSystem) -> dict:
    """Create one student, one homeowner, one admin and a room with a semester-long window."""
    student = system.users.add(Student(
        id=system.next_id(), name="Alice Student", email="alice@uni.ac.uk",
        university_name="Example University", student_number="S123456", verified=True,
    ))
    homeowner = system.users.add(Homeowner(
        id=system.next_id(), name="Bob Homeowner", email="bob@home.co.uk",
    ))
    admin = system.users.add(Admin(
        id=system.next_id(), name="Charlie Admin", email="admin@studentrentals.co.uk",
    ))
    prop = system.listings.add_property(Property(
        id=system.next_id(), owner_id=homeowner.id,
        address="12 College Road", city_or_area="Leeds",
        description="Shared house near campus",
    ))
    room = system.listings.add_room(Room(
        id=system.next_id(), property_id=prop.id,
        availability=DateRange(date(2024, 1, 1), date(2024, 6, 1)),
        room_type=RoomType.DOUBLE, monthly_rent=550,
        description="Bright double room", amenities={"wifi", "desk"},
    ))
    return {'student': student, 'homeowner': homeowner, 'admin': admin, 'property': prop, 'room': room}


class RentalsShell:
    def __init__(self, system: RentalSystem, stdout):
        self.system = system
        self.stdout = stdout

    def write(self, text: str = ''):
        self.stdout.write(text + '\n')

    def run(self, lines: Iterable[str]):
        """Execute lines until input ends or 'quit' is read."""
        for line in lines:
            if not self.execute(line):
                break

    def execute(self, line: str) -> bool:
        """Run one command line; returns False when the session should end."""
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            self.write(f"error: {e}")
            return True
        if not tokens:
            return True

        name, args = tokens[0].lower(), tokens[1:]
        if name in ('quit', 'exit'):
            return False

        handler = getattr(self, f"do_{name}", None)
        if handler is None:
            self.write(f"Unknown command: {name}. Type 'help' for the list of commands.")
            return True

        try:
            inspect.signature(handler).bind(*args)
        except TypeError:
            self.write(f"Wrong number of arguments for {name}. Type 'help' for usage.")
            return True

        try:
            handler(*args)
        except DomainError as e:
            logger.debug(f"Command {name} failed: {e!r}")
            self.write(f"error: {type(e).__name__}: {e}")
        return True

    # ===== Commands =====

    def do_help(self):
        self.write(HELP_TEXT)

    def do_request(self, student_id, room_id, start, end):
        booking = self.system.dispatch(RequestBookingCommand(
            student_id=parse_id(student_id),
            room_id=parse_id(room_id),
            start=parse_date(start),
            end=parse_date(end),
        ))
        self.write(f"requested {render_booking(booking)}")

    def do_accept(self, homeowner_id, booking_id):
        booking = self.system.dispatch(AcceptBookingCommand(parse_id(homeowner_id), parse_id(booking_id)))
        self.write(f"accepted {render_booking(booking)}")

    def do_reject(self, homeowner_id, booking_id):
        booking = self.system.dispatch(RejectBookingCommand(parse_id(homeowner_id), parse_id(booking_id)))
        self.write(f"rejected {render_booking(booking)}")

    def do_cancel(self, student_id, booking_id):
        booking = self.system.dispatch(CancelBookingCommand(parse_id(student_id), parse_id(booking_id)))
        self.write(f"cancelled {render_booking(booking)}")

    def do_bookings(self, user_id):
        user = self.system.users.get(parse_id(user_id))
        if isinstance(user, Student):
            bookings = self.system.lifecycle.list_for_student(user)
        elif isinstance(user, Homeowner):
            bookings = self.system.lifecycle.list_for_homeowner(user)
        else:
            raise ValidationError("Only students and homeowners have bookings")
        self._write_bookings(bookings)

    def do_pending(self, homeowner_id):
        user = self.system.users.get(parse_id(homeowner_id))
        if not isinstance(user, Homeowner):
            raise ValidationError("Only homeowners have pending requests")
        self._write_bookings(self.system.lifecycle.list_pending_for_homeowner(user))

    def do_free(self, room_id, start, end):
        room = self.system.listings.get_room(parse_id(room_id))
        period = DateRange(parse_date(start), parse_date(end))
        free = self.system.lifecycle.is_room_free(room, period)
        self.write(f"room {room.id} {period}: {'free' if free else 'taken'}")

    def do_rooms(self):
        properties = self.system.listings.all_properties()
        if not properties:
            self.write("No rooms.")
        for prop in properties:
            self.write(str(prop))
            for room_id in prop.room_ids:
                self.write(f"  {self.system.listings.get_room(room_id)}")

    def do_search(self, *criteria):
        filters = parse_search_criteria(criteria)
        rooms = self.system.listings.search_rooms(**filters)
        if not rooms:
            self.write("No rooms match.")
        period = filters.get('period')
        for room in rooms:
            if period is None:
                self.write(str(room))
            else:
                free = self.system.lifecycle.is_room_free(room, period)
                self.write(f"{room} {'free' if free else 'taken'} for {period}")

    def do_users(self):
        for user in self.system.admin.list_users():
            self.write(str(user))

    def do_deactivate(self, admin_id, user_id):
        admin = self.system.users.get(parse_id(admin_id))
        user = self.system.admin.deactivate_user(admin, parse_id(user_id))
        self.write(f"deactivated {user}")

    def _write_bookings(self, bookings):
        if not bookings:
            self.write("No bookings.")
        for booking in bookings:
            self.write(render_booking(booking))


def run_demo(shell: RentalsShell, actors: dict):
    """Request two overlapping bookings and accept both; the second accept conflicts."""
    student, homeowner, room = actors['student'], actors['homeowner'], actors['room']

    def echo(line):
        shell.write(f"> {line}")
        shell.execute(line)

    echo(f"request {student.id} {room.id} 2024-01-10 2024-02-10")
    echo(f"request {student.id} {room.id} 2024-02-01 2024-03-01")
    first, second = shell.system.lifecycle.list_for_student(student)[-2:]
    echo(f"pending {homeowner.id}")
    echo(f"accept {homeowner.id} {first.id}")
    echo(f"accept {homeowner.id} {second.id}")
    echo(f"bookings {homeowner.id}")
    echo(f"free {room.id} 2024-03-01 2024-04-01")
