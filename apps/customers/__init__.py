"""Customers app package.

Customers are the people bookings are made for. The app only stores
contact details; it has no booking logic of its own.
"""
