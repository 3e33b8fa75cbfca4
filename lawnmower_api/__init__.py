"""Lawnmower catalog query service and debug log collector."""

__version__ = "1.0.0"
