"""Utility functions."""

from .dates import end_of_day, end_of_week, from_iso, start_of_day, start_of_week, to_iso, utc_now
from .nutrition import scale_nutrition, sum_nutrition

__all__ = [
    "end_of_day",
    "end_of_week",
    "from_iso",
    "scale_nutrition",
    "start_of_day",
    "start_of_week",
    "sum_nutrition",
    "to_iso",
    "utc_now",
]
