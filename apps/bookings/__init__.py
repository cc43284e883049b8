"""Bookings app package.

This app encapsulates the booking domain: the booking model, the
availability engine that allocates rooms and reports fully occupied
dates, the entity stores it reads from, and the HTTP API around them.
"""
