"""
Availability Engine

Decides which room a stay goes into and which dates the hotel is full.
Every operation reads a fresh snapshot of rooms and bookings from the
entity store; nothing is cached between calls.

Rules:
- Stay windows are closed intervals: a booking from the 10th to the
  20th occupies both the 10th and the 20th
- Only active bookings occupy a room
- When several rooms are free, the lowest room id wins
"""

from datetime import date
from typing import Callable, List
import contextlib
import logging
import threading

from shared.domain.value_objects import DateRange, InvalidDateRange
from apps.bookings.domain.entities import Booking

logger = logging.getLogger(__name__)


class AvailabilityEngine:
    """
    Room availability and occupancy analysis

    Usage:
        engine = AvailabilityEngine(store)

        room_id = engine.find_available_room(start, end)   # int or None
        created = engine.create_booking(booking)           # True / False
        full = engine.get_fully_occupied_dates(start, end) # [date, ...]

    The store must provide list_rooms(), list_bookings(), add_booking()
    and an atomic() scope (see apps.bookings.repositories).

    Writers that open their own transaction around create_booking, or
    that change which bookings are active, enter serialized() first so
    the lock is only released after their commit.
    """

    def __init__(self, store, today: Callable[[], date] = date.today):
        self.store = store
        self._today = today
        self._lock = threading.RLock()

    @contextlib.contextmanager
    def serialized(self):
        """
        Hold the engine lock for the duration of the block

        Re-entrant: create_booking takes the same lock again inside.
        """
        with self._lock:
            yield self

    def find_available_room(self, start_date: date, end_date: date) -> int | None:
        """
        Find the lowest-id room with no active booking overlapping the window

        Returns None when every room is taken for at least one day of it.

        Raises:
            InvalidDateRange: start_date is not after today, or end_date
                is before start_date
        """
        today = self._today()
        if start_date <= today:
            raise InvalidDateRange(
                f"Start date ({start_date}) must be later than today ({today})"
            )
        window = DateRange(start_date, end_date)

        rooms = sorted(self.store.list_rooms(), key=lambda room: room.id)
        bookings = self._active_bookings()

        for room in rooms:
            if not self._overlapping(room.id, window, bookings):
                logger.debug(f"Room {room.id} is free for {window}")
                return room.id

        logger.debug(f"No free room among {len(rooms)} for {window}")
        return None

    def create_booking(self, booking: Booking) -> bool:
        """
        Allocate a room to the booking and persist it

        On success the booking is stamped with the room id, marked active
        and handed to the store, which assigns its id. When no room is
        free nothing is written and False is returned.

        Raises:
            InvalidDateRange: propagated unchanged from find_available_room
        """
        with self.serialized(), self.store.atomic():
            room_id = self.find_available_room(booking.start_date, booking.end_date)
            if room_id is None:
                logger.info(
                    f"Rejected booking for customer {booking.customer_id}: "
                    f"all rooms occupied {booking.start_date} - {booking.end_date}"
                )
                return False

            booking.room_id = room_id
            booking.is_active = True
            self.store.add_booking(booking)

        logger.info(f"Created {booking}")
        return True

    def get_fully_occupied_dates(self, start_date: date, end_date: date) -> List[date]:
        """
        List every date in the range on which all rooms are occupied

        Past ranges are allowed. The result is ascending and has no
        duplicates; it is empty when there are no rooms.

        Raises:
            InvalidDateRange: end_date is before start_date
        """
        window = DateRange(start_date, end_date)

        room_ids = {room.id for room in self.store.list_rooms()}
        if not room_ids:
            return []

        # day -> ids of rooms busy that day, only for days inside the window
        occupied: dict[date, set[int]] = {}
        for booking in self._active_bookings():
            if booking.room_id not in room_ids:
                continue
            if not booking.dates.overlaps_with(window):
                continue
            clipped = DateRange(
                max(booking.start_date, window.start_date),
                min(booking.end_date, window.end_date),
            )
            for day in clipped.days():
                occupied.setdefault(day, set()).add(booking.room_id)

        return [
            day for day in window.days()
            if occupied.get(day, set()) >= room_ids
        ]

    def is_room_free(
        self,
        room_id: int,
        start_date: date,
        end_date: date,
        exclude_booking_id: int | None = None,
    ) -> bool:
        """
        Check that no active booking of the room overlaps the window

        exclude_booking_id leaves one booking out of the check, so a
        cancelled booking can be tested against everything but itself
        before it is reactivated. Past windows are allowed.

        Raises:
            InvalidDateRange: end_date is before start_date
        """
        window = DateRange(start_date, end_date)
        bookings = [
            booking for booking in self._active_bookings()
            if exclude_booking_id is None or booking.id != exclude_booking_id
        ]
        return not self._overlapping(room_id, window, bookings)

    def _active_bookings(self) -> List[Booking]:
        return [booking for booking in self.store.list_bookings() if booking.is_active]

    @staticmethod
    def _overlapping(room_id: int, window: DateRange, bookings: List[Booking]) -> bool:
        return any(
            booking.room_id == room_id and booking.dates.overlaps_with(window)
            for booking in bookings
        )
