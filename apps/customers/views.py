"""Customer API views."""

from __future__ import annotations

from rest_framework import viewsets  # type: ignore

from .models import Customer
from .serializers import CustomerSerializer


class CustomerViewSet(viewsets.ModelViewSet):
    queryset = Customer.objects.order_by("id")
    serializer_class = CustomerSerializer
    http_method_names = ["get", "post", "head", "options"]
