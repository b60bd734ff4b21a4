"""Nutrition aggregation helpers."""

from collections.abc import Iterable, Mapping
from typing import Any

from meal_tracker_api.models.dashboard import NutritionTotals

MACRO_FIELDS = ("protein", "carbohydrates", "fat", "fiber")


def _value(item: Any, field: str) -> float:
    if isinstance(item, Mapping):
        value = item.get(field)
    else:
        value = getattr(item, field, None)
    return value or 0


def sum_nutrition(items: Iterable[Any], calories_field: str = "calories") -> NutritionTotals:
    """
    Sum calories and macros across items.

    Missing or ``None`` values count as zero. Use this only for totals:
    per-item display should keep ``None`` as unknown.

    Args:
        items: Models or dicts with ``calories`` and optional macro fields
        calories_field: Attribute holding calories on each item

    Returns:
        NutritionTotals with every field populated
    """
    totals = dict.fromkeys(("calories", *MACRO_FIELDS), 0.0)
    for item in items:
        totals["calories"] += _value(item, calories_field)
        for field in MACRO_FIELDS:
            totals[field] += _value(item, field)
    return NutritionTotals(**totals)


def scale_nutrition(item: Any, factor: float) -> dict[str, float | None]:
    """
    Multiply calories and known macros by ``factor``.

    Unknown macros stay ``None``.
    """
    scaled: dict[str, float | None] = {"calories": _value(item, "calories") * factor}
    for field in MACRO_FIELDS:
        value = item.get(field) if isinstance(item, Mapping) else getattr(item, field, None)
        scaled[field] = value * factor if value is not None else None
    return scaled
