"""Wiring of the availability engine for the Django request layer."""

from __future__ import annotations

from functools import lru_cache

from django.utils import timezone  # type: ignore

from .domain.availability import AvailabilityEngine
from .repositories import DjangoEntityStore


@lru_cache(maxsize=None)
def get_availability_engine() -> AvailabilityEngine:
    """Process-wide engine backed by the ORM store.

    A single instance is shared so its in-process lock covers every
    create_booking call handled by this worker.
    """

    return AvailabilityEngine(DjangoEntityStore(), today=timezone.localdate)
