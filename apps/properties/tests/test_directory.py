"""Tests for listings: properties, rooms and the property directory."""

from __future__ import annotations

from datetime import date

from django.test import SimpleTestCase

from apps.properties.directory import PropertyDirectory
from apps.properties.domain.entities import Property, Room, RoomType
from shared.domain.exceptions import NotFound, ValidationError
from shared.domain.value_objects import DateRange

WINDOW = DateRange(date(2024, 1, 1), date(2024, 6, 1))


class RoomEntityTests(SimpleTestCase):
    def test_negative_rent_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Room(id=1, property_id=1, availability=WINDOW, monthly_rent=-1)

    def test_availability_must_be_a_date_range(self) -> None:
        with self.assertRaises(ValidationError):
            Room(id=1, property_id=1, availability=(date(2024, 1, 1), date(2024, 6, 1)))

    def test_amenities_are_frozen(self) -> None:
        room = Room(id=1, property_id=1, availability=WINDOW, amenities=["wifi", "desk", "wifi"])
        self.assertEqual(room.amenities, frozenset({"wifi", "desk"}))

    def test_within_availability(self) -> None:
        room = Room(id=1, property_id=1, availability=WINDOW, room_type=RoomType.ENSUITE)
        self.assertTrue(room.is_within_availability(DateRange(date(2024, 2, 1), date(2024, 3, 1))))
        self.assertFalse(room.is_within_availability(DateRange(date(2024, 5, 1), date(2024, 7, 1))))

    def test_property_requires_address(self) -> None:
        with self.assertRaises(ValidationError):
            Property(id=1, owner_id=2, address=" ", city_or_area="Leeds")


class PropertyDirectoryTests(SimpleTestCase):
    def setUp(self) -> None:
        self.directory = PropertyDirectory()
        self.house = self.directory.add_property(
            Property(id=10, owner_id=1, address="12 College Road", city_or_area="Leeds")
        )

    def test_add_room_links_it_to_the_property(self) -> None:
        room = self.directory.add_room(Room(id=20, property_id=10, availability=WINDOW))

        self.assertIs(self.directory.get_room(20), room)
        self.assertEqual(self.house.room_ids, [20])
        self.assertTrue(self.directory.get_property(10).is_owned_by(1))

    def test_room_of_unknown_property(self) -> None:
        with self.assertRaises(NotFound):
            self.directory.add_room(Room(id=20, property_id=99, availability=WINDOW))
        self.assertEqual(self.directory.search_rooms(), [])

    def test_duplicates_are_rejected(self) -> None:
        self.directory.add_room(Room(id=20, property_id=10, availability=WINDOW))
        with self.assertRaises(ValidationError):
            self.directory.add_room(Room(id=20, property_id=10, availability=WINDOW))
        with self.assertRaises(ValidationError):
            self.directory.add_property(
                Property(id=10, owner_id=3, address="1 Other Street", city_or_area="York")
            )

    def test_unknown_lookups(self) -> None:
        with self.assertRaises(NotFound):
            self.directory.get_room(1)
        with self.assertRaises(NotFound):
            self.directory.get_property(1)

    def test_rooms_for_owner(self) -> None:
        other = self.directory.add_property(
            Property(id=11, owner_id=2, address="3 Park Lane", city_or_area="York")
        )
        mine = self.directory.add_room(Room(id=20, property_id=10, availability=WINDOW))
        self.directory.add_room(Room(id=21, property_id=other.id, availability=WINDOW))

        self.assertEqual(self.directory.rooms_for_owner(1), [mine])
        self.assertEqual(self.directory.rooms_for_owner(5), [])
        self.assertEqual(len(self.directory.all_properties()), 2)


class RoomSearchTests(SimpleTestCase):
    def setUp(self) -> None:
        self.directory = PropertyDirectory()
        leeds = self.directory.add_property(
            Property(id=1, owner_id=100, address="12 College Road", city_or_area="Leeds")
        )
        york = self.directory.add_property(
            Property(id=2, owner_id=100, address="3 Park Lane", city_or_area="York")
        )
        self.cheap_single = self.directory.add_room(Room(
            id=10, property_id=leeds.id, availability=WINDOW, room_type=RoomType.SINGLE, monthly_rent=400,
        ))
        self.leeds_double = self.directory.add_room(Room(
            id=11, property_id=leeds.id, availability=DateRange(date(2024, 3, 1), date(2024, 9, 1)),
            room_type=RoomType.DOUBLE, monthly_rent=600,
        ))
        self.york_double = self.directory.add_room(Room(
            id=12, property_id=york.id, availability=WINDOW, room_type=RoomType.DOUBLE, monthly_rent=550,
        ))

    def test_no_criteria_returns_every_room(self) -> None:
        self.assertEqual(
            self.directory.search_rooms(),
            [self.cheap_single, self.leeds_double, self.york_double],
        )

    def test_city_is_case_insensitive(self) -> None:
        self.assertEqual(self.directory.search_rooms(city="  lEEDS "), [self.cheap_single, self.leeds_double])
        self.assertEqual(self.directory.search_rooms(city="Bristol"), [])

    def test_city_and_room_type_combine(self) -> None:
        self.assertEqual(
            self.directory.search_rooms(city="Leeds", room_type=RoomType.DOUBLE),
            [self.leeds_double],
        )
        self.assertEqual(
            self.directory.search_rooms(room_type=RoomType.DOUBLE),
            [self.leeds_double, self.york_double],
        )

    def test_rent_bounds_are_inclusive(self) -> None:
        self.assertEqual(
            self.directory.search_rooms(min_rent=400, max_rent=550),
            [self.cheap_single, self.york_double],
        )
        self.assertEqual(self.directory.search_rooms(min_rent=601), [])

    def test_period_must_fit_the_availability_window(self) -> None:
        march = DateRange(date(2024, 3, 1), date(2024, 4, 1))
        summer = DateRange(date(2024, 6, 15), date(2024, 8, 1))

        self.assertEqual(
            self.directory.search_rooms(period=march),
            [self.cheap_single, self.leeds_double, self.york_double],
        )
        self.assertEqual(self.directory.search_rooms(period=summer), [self.leeds_double])

    def test_invalid_criteria(self) -> None:
        with self.assertRaises(ValidationError):
            self.directory.search_rooms(min_rent=700, max_rent=500)
        with self.assertRaises(ValidationError):
            self.directory.search_rooms(period=(date(2024, 3, 1), date(2024, 4, 1)))
