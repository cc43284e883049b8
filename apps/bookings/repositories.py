"""Entity stores the availability engine reads rooms and bookings from."""

from __future__ import annotations

import contextlib
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterable, List

from django.db import transaction  # type: ignore

from apps.bookings.domain.entities import Booking, Room

logger = logging.getLogger(__name__)


class AbstractEntityStore(ABC):
    """Source of room/booking snapshots and sink for new bookings."""

    @abstractmethod
    def list_rooms(self) -> List[Room]:
        """All rooms, ordered by ascending id"""

    @abstractmethod
    def list_bookings(self) -> List[Booking]:
        """All bookings, active or not"""

    @abstractmethod
    def get_booking(self, booking_id: int) -> Booking | None:
        """One booking by id, None when missing"""

    @abstractmethod
    def add_booking(self, booking: Booking) -> Booking:
        """Persist a booking and set its id"""

    @abstractmethod
    def update_booking(self, booking: Booking) -> Booking:
        """Store the customer and active flag of an existing booking"""

    def atomic(self):
        """Scope serializing a read-then-write sequence against this store."""
        return contextlib.nullcontext()


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic().

    Backends without row locks (SQLite) compile the query without
    FOR UPDATE.
    """

    if not transaction.get_connection().in_atomic_block:
        return queryset
    return queryset.select_for_update()


def _to_entity(row) -> Booking:
    return Booking(
        id=row.id,
        customer_id=row.customer_id,
        room_id=row.room_id,
        start_date=row.start_date,
        end_date=row.end_date,
        is_active=row.is_active,
    )


class DjangoEntityStore(AbstractEntityStore):
    """
    Entity store backed by the Django ORM

    Inside atomic() the room rows are read with SELECT ... FOR UPDATE, so
    concurrent create_booking calls queue up on the same rows instead of
    both seeing a room as free.
    """

    def list_rooms(self) -> List[Room]:
        from apps.rooms.models import Room as RoomModel

        queryset = _lock_queryset_if_possible(RoomModel.objects.order_by("id"))
        return [Room(id=row.id, description=row.description) for row in queryset]

    def list_bookings(self) -> List[Booking]:
        from .models import Booking as BookingModel

        return [_to_entity(row) for row in BookingModel.objects.order_by("id")]

    def get_booking(self, booking_id: int) -> Booking | None:
        from .models import Booking as BookingModel

        queryset = _lock_queryset_if_possible(BookingModel.objects.filter(pk=booking_id))
        row = queryset.first()
        return _to_entity(row) if row is not None else None

    def add_booking(self, booking: Booking) -> Booking:
        from .models import Booking as BookingModel

        row = BookingModel.objects.create(
            customer_id=booking.customer_id,
            room_id=booking.room_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            is_active=booking.is_active,
        )
        booking.id = row.id
        logger.debug(f"Stored booking {row.id} for room {row.room_id}")
        return booking

    def update_booking(self, booking: Booking) -> Booking:
        from .models import Booking as BookingModel

        row = BookingModel.objects.get(pk=booking.id)
        row.customer_id = booking.customer_id
        row.is_active = booking.is_active
        row.save(update_fields=["customer", "is_active", "updated_at"])
        logger.debug(f"Updated booking {row.id}: customer {row.customer_id}, active {row.is_active}")
        return booking

    def atomic(self):
        return transaction.atomic()


class InMemoryEntityStore(AbstractEntityStore):
    """
    Entity store kept in process memory

    Used by tests and scripts. Booking ids are assigned from a counter
    continuing after the highest id already present.
    """

    def __init__(self, rooms: Iterable[Room] = (), bookings: Iterable[Booking] = ()):
        self._rooms: List[Room] = list(rooms)
        self._bookings: List[Booking] = [replace(b) for b in bookings]
        self._next_id = max((b.id or 0 for b in self._bookings), default=0) + 1
        self._lock = threading.RLock()

    def list_rooms(self) -> List[Room]:
        return sorted(self._rooms, key=lambda room: room.id)

    def list_bookings(self) -> List[Booking]:
        return [replace(b) for b in self._bookings]

    def get_booking(self, booking_id: int) -> Booking | None:
        for booking in self._bookings:
            if booking.id == booking_id:
                return replace(booking)
        return None

    def add_booking(self, booking: Booking) -> Booking:
        with self._lock:
            booking.id = self._next_id
            self._next_id += 1
            self._bookings.append(replace(booking))
        return booking

    def update_booking(self, booking: Booking) -> Booking:
        with self._lock:
            for idx, stored in enumerate(self._bookings):
                if stored.id == booking.id:
                    self._bookings[idx] = replace(
                        stored, customer_id=booking.customer_id, is_active=booking.is_active
                    )
                    return booking
        raise KeyError(f"Booking {booking.id} not found")

    @contextlib.contextmanager
    def atomic(self):
        with self._lock:
            yield self
