"""Core module - shared helpers for the property portal.

Contains configuration, domain errors, display formatting, search helpers
and observability. Nothing in here knows about HTTP or about a specific
user role.
"""

__version__ = "1.0.0"
