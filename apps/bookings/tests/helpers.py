"""Builders shared by the booking tests."""

from __future__ import annotations

from datetime import date, datetime, timezone

from apps.bookings.bootstrap import RentalSystem, bootstrap
from apps.properties.domain.entities import Property, Room
from apps.users.domain.entities import Admin, Homeowner, Student
from shared.domain.value_objects import DateRange
from shared.infrastructure.clock import FixedClock
from shared.infrastructure.ids import CounterIdAllocator

NOW = datetime(2024, 1, 5, 9, 0, tzinfo=timezone.utc)


def d(value: str) -> date:
    return date.fromisoformat(value)


def period(start: str, end: str) -> DateRange:
    return DateRange(d(start), d(end))


def build_system(now: datetime = NOW) -> RentalSystem:
    return bootstrap(id_allocator=CounterIdAllocator(), clock=FixedClock(now))


def add_student(system: RentalSystem, name: str = "Alice Student", email: str | None = None) -> Student:
    email = email or f"{name.split()[0].lower()}@uni.ac.uk"
    return system.users.add(Student(
        id=system.next_id(), name=name, email=email,
        university_name="Example University", student_number=f"S{len(system.users) + 1:06d}",
    ))


def add_homeowner(system: RentalSystem, name: str = "Bob Homeowner", email: str | None = None) -> Homeowner:
    email = email or f"{name.split()[0].lower()}@home.co.uk"
    return system.users.add(Homeowner(id=system.next_id(), name=name, email=email))


def add_admin(system: RentalSystem) -> Admin:
    return system.users.add(Admin(id=system.next_id(), name="Charlie Admin", email="admin@rentals.co.uk"))


def add_room(system: RentalSystem, owner: Homeowner,
             availability: DateRange | None = None) -> Room:
    prop = system.listings.add_property(Property(
        id=system.next_id(), owner_id=owner.id,
        address="12 College Road", city_or_area="Leeds",
    ))
    return system.listings.add_room(Room(
        id=system.next_id(), property_id=prop.id,
        availability=availability or period("2024-01-01", "2024-06-01"),
        monthly_rent=500,
    ))
