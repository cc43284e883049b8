"""Fill an empty database with demo customers, rooms and bookings."""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.bookings.models import Booking
from apps.customers.models import Customer
from apps.rooms.models import Room

CUSTOMERS = [
    ("Test User 1", "test1@example.com"),
    ("Test User 2", "test2@example.com"),
]

ROOMS = ["Room 1", "Room 2", "Room 3"]

# every seeded room is booked from today+10 to today+20
OCCUPIED_FROM_DAYS = 10
OCCUPIED_TO_DAYS = 20


class Command(BaseCommand):
    help = "Seeds customers, rooms and a fully occupied period for local use and demos"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete existing bookings, rooms and customers first",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            Booking.objects.all().delete()
            Room.objects.all().delete()
            Customer.objects.all().delete()
            self.stdout.write("Existing data removed")

        if Booking.objects.exists():
            self.stdout.write(self.style.WARNING("Database already seeded, nothing to do"))
            return

        customers = [
            Customer.objects.create(name=name, email=email) for name, email in CUSTOMERS
        ]
        rooms = [Room.objects.create(description=description) for description in ROOMS]

        today = timezone.localdate()
        start_date = today + timedelta(days=OCCUPIED_FROM_DAYS)
        end_date = today + timedelta(days=OCCUPIED_TO_DAYS)
        Booking.objects.bulk_create(
            Booking(
                customer=customers[idx % len(customers)],
                room=room,
                start_date=start_date,
                end_date=end_date,
                is_active=True,
            )
            for idx, room in enumerate(rooms)
        )

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(customers)} customers, {len(rooms)} rooms "
                f"and bookings {start_date} - {end_date}"
            )
        )
