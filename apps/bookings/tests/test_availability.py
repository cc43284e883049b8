"""Unit tests for the availability engine over an in-memory store."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from apps.bookings.domain.availability import AvailabilityEngine
from apps.bookings.domain.entities import Booking, Room
from apps.bookings.repositories import InMemoryEntityStore
from shared.domain.value_objects import InvalidDateRange

TODAY = date(2030, 3, 1)


def day(offset: int) -> date:
    return TODAY + timedelta(days=offset)


def make_store() -> InMemoryEntityStore:
    rooms = [Room(id=1, description="A"), Room(id=2, description="B")]
    bookings = [
        Booking(id=1, customer_id=1, room_id=1, start_date=day(1), end_date=day(2), is_active=True),
        Booking(id=2, customer_id=1, room_id=1, start_date=day(10), end_date=day(20), is_active=True),
        Booking(id=3, customer_id=2, room_id=2, start_date=day(10), end_date=day(20), is_active=True),
    ]
    return InMemoryEntityStore(rooms=rooms, bookings=bookings)


@pytest.fixture
def store() -> InMemoryEntityStore:
    return make_store()


@pytest.fixture
def engine(store) -> AvailabilityEngine:
    return AvailabilityEngine(store, today=lambda: TODAY)


# ===== find_available_room =====

def test_find_available_room_skips_room_booked_that_day(engine):
    assert engine.find_available_room(day(1), day(1)) == 2


def test_find_available_room_prefers_lowest_room_id(engine):
    assert engine.find_available_room(day(5), day(7)) == 1


@pytest.mark.parametrize(
    "start_offset, end_offset",
    [
        (5, 4),    # end date before start date
        (-1, 1),   # start date in the past
        (0, 3),    # start date today
    ],
)
def test_find_available_room_rejects_invalid_window(engine, start_offset, end_offset):
    with pytest.raises(InvalidDateRange):
        engine.find_available_room(day(start_offset), day(end_offset))


@pytest.mark.parametrize(
    "start_offset, end_offset",
    [
        (9, 10),   # ends on the first occupied day
        (20, 21),  # starts on the last occupied day
        (10, 10),
        (20, 20),
        (9, 21),
        (15, 18),
    ],
)
def test_find_available_room_returns_none_when_every_room_overlaps(engine, start_offset, end_offset):
    assert engine.find_available_room(day(start_offset), day(end_offset)) is None


def test_find_available_room_result_has_no_overlapping_active_booking(engine, store):
    target = day(1)
    room_id = engine.find_available_room(target, target)

    conflicting = [
        b for b in store.list_bookings()
        if b.is_active and b.room_id == room_id and b.start_date <= target <= b.end_date
    ]
    assert conflicting == []


def test_find_available_room_ignores_inactive_bookings():
    store = InMemoryEntityStore(
        rooms=[Room(id=1, description="A")],
        bookings=[
            Booking(id=1, customer_id=1, room_id=1, start_date=day(3), end_date=day(6), is_active=False),
        ],
    )
    engine = AvailabilityEngine(store, today=lambda: TODAY)

    assert engine.find_available_room(day(4), day(5)) == 1


def test_find_available_room_without_rooms_returns_none():
    engine = AvailabilityEngine(InMemoryEntityStore(), today=lambda: TODAY)

    assert engine.find_available_room(day(1), day(2)) is None


# ===== create_booking =====

@pytest.mark.parametrize(
    "start_offset, end_offset, expected",
    [
        (1, 2, True),
        (10, 15, False),
        (21, 25, True),
    ],
)
def test_create_booking_result(engine, start_offset, end_offset, expected):
    booking = Booking(customer_id=1, start_date=day(start_offset), end_date=day(end_offset))

    assert engine.create_booking(booking) is expected


def test_create_booking_stores_active_booking_with_free_room(engine, store):
    booking = Booking(customer_id=7, start_date=day(25), end_date=day(26))

    assert engine.create_booking(booking) is True

    assert booking.id == 4
    assert booking.is_active is True
    assert booking.room_id == 1
    stored = [b for b in store.list_bookings() if b.id == booking.id]
    assert len(stored) == 1
    assert stored[0].customer_id == 7
    assert (stored[0].start_date, stored[0].end_date) == (day(25), day(26))


def test_create_booking_when_all_rooms_occupied_adds_nothing(engine, store):
    booking = Booking(customer_id=1, start_date=day(15), end_date=day(18))

    assert engine.create_booking(booking) is False

    assert len(store.list_bookings()) == 3
    assert booking.id is None
    assert booking.room_id is None
    assert booking.is_active is False


def test_create_booking_propagates_invalid_dates(engine, store):
    booking = Booking(customer_id=1, start_date=day(-1), end_date=day(1))

    with pytest.raises(InvalidDateRange):
        engine.create_booking(booking)

    assert len(store.list_bookings()) == 3


def test_create_booking_never_double_allocates(engine, store):
    # rooms 1 and 2 are both free on day 5; the third request must fail
    first = Booking(customer_id=1, start_date=day(5), end_date=day(6))
    second = Booking(customer_id=2, start_date=day(5), end_date=day(6))
    third = Booking(customer_id=3, start_date=day(6), end_date=day(6))

    assert engine.create_booking(first) is True
    assert engine.create_booking(second) is True
    assert engine.create_booking(third) is False

    assert {first.room_id, second.room_id} == {1, 2}


# ===== get_fully_occupied_dates =====

def test_fully_occupied_dates_for_scenario(engine):
    dates = engine.get_fully_occupied_dates(TODAY, day(30))

    assert dates == [day(offset) for offset in range(10, 21)]


@pytest.mark.parametrize(
    "start_offset, end_offset, expected_count",
    [
        (1, 5, 0),
        (10, 20, 11),
        (15, 18, 4),
        (25, 30, 0),
    ],
)
def test_fully_occupied_dates_count(engine, start_offset, end_offset, expected_count):
    dates = engine.get_fully_occupied_dates(day(start_offset), day(end_offset))

    assert len(dates) == expected_count
    assert dates == sorted(set(dates))


def test_fully_occupied_dates_allows_past_ranges():
    store = InMemoryEntityStore(
        rooms=[Room(id=1, description="A")],
        bookings=[
            Booking(id=1, customer_id=1, room_id=1, start_date=day(-5), end_date=day(-3), is_active=True),
        ],
    )
    engine = AvailabilityEngine(store, today=lambda: TODAY)

    assert engine.get_fully_occupied_dates(day(-10), day(-1)) == [day(-5), day(-4), day(-3)]


def test_fully_occupied_dates_rejects_end_before_start(engine):
    with pytest.raises(InvalidDateRange):
        engine.get_fully_occupied_dates(day(5), day(4))


def test_fully_occupied_dates_single_day_window(engine):
    assert engine.get_fully_occupied_dates(day(10), day(10)) == [day(10)]


def test_fully_occupied_dates_without_bookings_is_empty():
    store = InMemoryEntityStore(rooms=[Room(id=1, description="A"), Room(id=2, description="B")])
    engine = AvailabilityEngine(store, today=lambda: TODAY)

    assert engine.get_fully_occupied_dates(TODAY, day(30)) == []


def test_fully_occupied_dates_without_rooms_is_empty():
    engine = AvailabilityEngine(InMemoryEntityStore(), today=lambda: TODAY)

    assert engine.get_fully_occupied_dates(TODAY, day(30)) == []


def test_fully_occupied_dates_ignores_inactive_bookings(store):
    store.add_booking(
        Booking(customer_id=3, room_id=2, start_date=day(1), end_date=day(2), is_active=False)
    )
    engine = AvailabilityEngine(store, today=lambda: TODAY)

    assert engine.get_fully_occupied_dates(day(1), day(2)) == []


def test_fully_occupied_dates_needs_simultaneous_coverage():
    # each room is busy for part of the window, never both on the same day
    store = InMemoryEntityStore(
        rooms=[Room(id=1, description="A"), Room(id=2, description="B")],
        bookings=[
            Booking(id=1, customer_id=1, room_id=1, start_date=day(1), end_date=day(3), is_active=True),
            Booking(id=2, customer_id=2, room_id=2, start_date=day(4), end_date=day(6), is_active=True),
        ],
    )
    engine = AvailabilityEngine(store, today=lambda: TODAY)

    assert engine.get_fully_occupied_dates(day(1), day(6)) == []


def test_adding_active_booking_never_frees_a_date(store):
    engine = AvailabilityEngine(store, today=lambda: TODAY)
    before = engine.get_fully_occupied_dates(TODAY, day(30))

    store.add_booking(
        Booking(customer_id=3, room_id=2, start_date=day(1), end_date=day(2), is_active=True)
    )
    after = engine.get_fully_occupied_dates(TODAY, day(30))

    assert set(before) <= set(after)
    assert day(1) in after and day(2) in after


# ===== read operations have no hidden state =====

def test_read_operations_are_repeatable(engine):
    assert engine.find_available_room(day(1), day(1)) == engine.find_available_room(day(1), day(1))
    assert engine.get_fully_occupied_dates(TODAY, day(30)) == engine.get_fully_occupied_dates(TODAY, day(30))


def test_read_operations_do_not_mutate_store(engine, store):
    before = store.list_bookings()

    engine.find_available_room(day(1), day(30))
    engine.get_fully_occupied_dates(TODAY, day(30))

    assert store.list_bookings() == before


# ===== is_room_free =====

def test_is_room_free_sees_overlap_on_shared_day(engine):
    assert engine.is_room_free(1, day(3), day(9)) is True
    assert engine.is_room_free(1, day(9), day(10)) is False
    assert engine.is_room_free(2, day(1), day(2)) is True


def test_is_room_free_can_leave_one_booking_out(engine):
    assert engine.is_room_free(1, day(10), day(20), exclude_booking_id=2) is True
    assert engine.is_room_free(1, day(10), day(20), exclude_booking_id=3) is False


def test_is_room_free_ignores_inactive_bookings(store):
    store.add_booking(
        Booking(customer_id=3, room_id=2, start_date=day(1), end_date=day(2), is_active=False)
    )
    engine = AvailabilityEngine(store, today=lambda: TODAY)

    assert engine.is_room_free(2, day(1), day(2)) is True


def test_is_room_free_rejects_end_before_start(engine):
    with pytest.raises(InvalidDateRange):
        engine.is_room_free(1, day(5), day(4))


# ===== serialized =====

def test_create_booking_inside_serialized_block(engine, store):
    booking = Booking(customer_id=1, start_date=day(5), end_date=day(5))

    with engine.serialized():
        assert engine.create_booking(booking) is True

    assert booking.id == 4
