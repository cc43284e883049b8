"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A new booking was created and a room allocated to it

    Triggers:
    - Audit log entry for the allocation
    """
    booking_id: int = None
    room_id: int = None
    customer_id: int = None
    start_date: date = None
    end_date: date = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': self.booking_id,
            'room_id': self.room_id,
            'customer_id': self.customer_id,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
        })
        return data
