"""Rooms app package.

This app holds the hotel's rooms: the resources the availability
engine allocates bookings to.
"""
