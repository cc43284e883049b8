"""
Shared Kernel

This module contains base classes and utilities shared by the hotel
booking apps: value objects, domain events, the unit of work and the
message bus.
"""
