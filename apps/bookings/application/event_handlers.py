"""Handlers for booking domain events."""

import logging

from shared.application.message_bus import message_bus
from apps.bookings.domain.events import BookingCreated

logger = logging.getLogger(__name__)


def log_booking_created(event: BookingCreated) -> None:
    logger.info(f"Room allocated: {event.to_dict()}")


def register_handlers(bus=message_bus) -> None:
    bus.register_event_handler(BookingCreated, log_booking_created)
