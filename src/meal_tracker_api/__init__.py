"""Meal logging and AI nutrition estimation API."""

__version__ = "1.0.0"
