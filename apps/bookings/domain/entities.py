"""
Booking Domain Entities

Plain snapshot types the availability engine works on:
- Room: a bookable hotel room
- Booking: a customer's stay in a room
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.value_objects import DateRange


@dataclass(frozen=True)
class Room:
    """A hotel room. Identity and description are owned by the store."""
    id: int
    description: str

    def __post_init__(self):
        if self.id < 1:
            raise ValueError("Room id must be a positive integer")
        if not self.description:
            raise ValueError("Room description is required")


@dataclass
class Booking:
    """
    Booking entity

    Represents a customer's stay in a room from start_date to end_date,
    both days inclusive.

    Key invariants:
    - start_date <= end_date once the booking is stored
    - Only active bookings occupy their room
    - room_id and is_active are assigned by the availability engine
      when the booking is created
    """
    customer_id: int
    start_date: date
    end_date: date
    room_id: int | None = None
    is_active: bool = False
    id: int | None = None

    @property
    def dates(self) -> DateRange:
        """Stay window as a closed DateRange"""
        return DateRange(self.start_date, self.end_date)

    def __str__(self):
        return f"Booking {self.id} (room {self.room_id}, {self.start_date} - {self.end_date})"
