"""Compute time-spent statistics from calendar events."""

__version__ = "0.1.0"
