"""Subway arrivals and elevator status, kept in memory and served as JSON over HTTP."""

__version__ = "0.1.0"