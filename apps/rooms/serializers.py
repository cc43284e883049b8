"""Serializers for rooms."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Room


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "description"]
