"""Top-level package for Django configuration.

This package contains settings modules for the hotel booking service's
environments and entry points for WSGI and ASGI.
"""
