"""Seat booking service for capacity-limited sessions."""

__version__ = "1.0.0"
