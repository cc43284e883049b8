"""API views for the booking domain."""

from __future__ import annotations

import logging

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.domain.value_objects import InvalidDateRange

from .application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    UpdateBookingCommand,
    UpdateBookingHandler,
)
from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
    DateRangeQuerySerializer,
)
from .services import get_availability_engine

logger = logging.getLogger(__name__)

NO_ROOM_AVAILABLE_MESSAGE = (
    "The booking could not be created. All rooms are occupied. Please try another period."
)
ROOM_OCCUPIED_MESSAGE = (
    "The booking could not be reactivated. Its room is occupied in that period."
)


class BookingViewSet(viewsets.ModelViewSet):
    """Bookings: CRUD plus room allocation and occupancy queries."""

    queryset = Booking.objects.select_related("customer", "room").all()
    serializer_class = BookingSerializer
    filterset_class = BookingFilterSet
    http_method_names = ["get", "post", "put", "delete", "head", "options"]
    lookup_value_regex = r"[0-9]+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "update":
            return BookingUpdateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = CreateBookingCommand(
            customer_id=serializer.validated_data["customer"].id,
            start_date=serializer.validated_data["start_date"],
            end_date=serializer.validated_data["end_date"],
        )

        try:
            booking = CreateBookingHandler(get_availability_engine()).handle(command)
        except InvalidDateRange as exc:
            logger.warning(f"Rejected booking request with invalid dates: {exc}")
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        if booking is None:
            return Response({"detail": NO_ROOM_AVAILABLE_MESSAGE}, status=status.HTTP_409_CONFLICT)

        instance = self.get_queryset().get(pk=booking.id)
        read_serializer = BookingSerializer(instance, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if serializer.validated_data["id"] != int(kwargs[self.lookup_field]):
            return Response(
                {"detail": "Booking id in the body does not match the URL."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        booking: Booking = self.get_object()  # type: ignore
        customer = serializer.validated_data.get("customer")
        command = UpdateBookingCommand(
            booking_id=booking.id,
            customer_id=customer.id if customer is not None else None,
            is_active=serializer.validated_data.get("is_active"),
        )

        if not UpdateBookingHandler(get_availability_engine()).handle(command):
            return Response({"detail": ROOM_OCCUPIED_MESSAGE}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="available-room")
    def available_room(self, request):  # type: ignore
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        try:
            room_id = get_availability_engine().find_available_room(
                query.validated_data["start"],
                query.validated_data["end"],
            )
        except InvalidDateRange as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"room_id": room_id})

    @action(detail=False, methods=["get"], url_path="fully-occupied-dates")
    def fully_occupied_dates(self, request):  # type: ignore
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        try:
            dates = get_availability_engine().get_fully_occupied_dates(
                query.validated_data["start"],
                query.validated_data["end"],
            )
        except InvalidDateRange as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"dates": [day.isoformat() for day in dates]})
