"""Room API views."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Room
from .serializers import RoomSerializer


class RoomViewSet(viewsets.ModelViewSet):
    """List, inspect, add and remove hotel rooms."""

    queryset = Room.objects.order_by("id")
    serializer_class = RoomSerializer
    http_method_names = ["get", "post", "delete", "head", "options"]
    lookup_value_regex = r"-?[0-9]+"

    def destroy(self, request, *args, **kwargs):  # type: ignore
        if int(kwargs[self.lookup_field]) <= 0:
            return Response(
                {"detail": "Room id must be a positive integer."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return super().destroy(request, *args, **kwargs)
