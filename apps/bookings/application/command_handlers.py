"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate the availability engine within transactions.

Commands:
- CreateBookingCommand: Allocate a room to a stay and store the booking
- UpdateBookingCommand: Change the customer or the active flag of a booking

Both handlers hold the engine lock around their whole unit of work, so
the lock is released only after the transaction has committed.
"""

from dataclasses import dataclass
from datetime import date
import logging

from shared.application.uow import DjangoUnitOfWork
from apps.bookings.domain.availability import AvailabilityEngine
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.events import BookingCreated

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    The room and the active flag are not part of the command:
    the availability engine assigns them.
    """
    customer_id: int
    start_date: date
    end_date: date


@dataclass
class UpdateBookingCommand:
    """
    Command to update an existing booking

    Only the customer and the active flag can change; None leaves the
    field as it is. Room and dates stay as the engine allocated them.
    """
    booking_id: int
    customer_id: int | None = None
    is_active: bool | None = None


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    1. Take the engine lock
    2. Start database transaction (atomic)
    3. Let the engine find a free room and store the booking
       (rooms are row-locked for the duration of the transaction)
    4. Queue BookingCreated
    5. Commit transaction, publish events (after commit)
    6. Release the engine lock
    """

    def __init__(self, engine: AvailabilityEngine):
        self.engine = engine

    def handle(self, command: CreateBookingCommand) -> Booking | None:
        """
        Handle booking creation

        Returns: the stored Booking, or None when every room is occupied

        Raises:
            InvalidDateRange: start date not in the future or end before start
        """
        logger.info(
            f"Creating booking for customer {command.customer_id}, "
            f"dates {command.start_date} - {command.end_date}"
        )

        booking = Booking(
            customer_id=command.customer_id,
            start_date=command.start_date,
            end_date=command.end_date,
        )

        with self.engine.serialized(), DjangoUnitOfWork() as uow:
            if not self.engine.create_booking(booking):
                return None

            uow.add_event(BookingCreated(
                aggregate_id=booking.id,
                booking_id=booking.id,
                room_id=booking.room_id,
                customer_id=booking.customer_id,
                start_date=booking.start_date,
                end_date=booking.end_date,
            ))

        logger.info(f"Booking {booking.id} created in room {booking.room_id}")
        return booking


class UpdateBookingHandler:
    """
    Handler for UpdateBooking command

    Reactivating a cancelled booking puts it back into its room, so it
    is only allowed when no other active booking of that room overlaps
    its dates.
    """

    def __init__(self, engine: AvailabilityEngine):
        self.engine = engine

    def handle(self, command: UpdateBookingCommand) -> bool:
        """
        Handle booking update

        Returns: True when stored, False when reactivation would
        double-book the room (nothing is written then)

        Raises:
            ValueError: booking not found
        """
        logger.info(f"Updating booking {command.booking_id}")

        store = self.engine.store
        with self.engine.serialized(), DjangoUnitOfWork():
            booking = store.get_booking(command.booking_id)
            if booking is None:
                raise ValueError(f"Booking {command.booking_id} not found")

            if command.is_active and not booking.is_active:
                free = self.engine.is_room_free(
                    booking.room_id,
                    booking.start_date,
                    booking.end_date,
                    exclude_booking_id=booking.id,
                )
                if not free:
                    logger.info(
                        f"Rejected reactivation of {booking}: room {booking.room_id} "
                        f"is occupied in that period"
                    )
                    return False

            if command.customer_id is not None:
                booking.customer_id = command.customer_id
            if command.is_active is not None:
                booking.is_active = command.is_active
            store.update_booking(booking)

        logger.info(f"Booking {booking.id} updated (active: {booking.is_active})")
        return True
