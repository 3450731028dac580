from __future__ import annotations

from typing import Callable, List, Tuple

from .schema import ShippingCategory

Rule = Tuple[Callable[[float, float], bool], ShippingCategory]


def _within(max_kg: float, max_value: float) -> Callable[[float, float], bool]:
    return lambda kg, value: kg <= max_kg and value <= max_value


# Priority list, evaluated top to bottom. Both limits must hold, so a light
# but valuable parcel can skip past the lighter buckets.
CATEGORY_RULES: List[Rule] = [
    (_within(1, 1_000_000), ShippingCategory.SMALL_PARCEL),
    (_within(5, 5_000_000), ShippingCategory.MEDIUM_PARCEL),
    (_within(15, 20_000_000), ShippingCategory.LARGE_PARCEL),
    (_within(30, 100_000_000), ShippingCategory.EXTRA_LARGE_PARCEL),
]


def categorize(weight_kg: float, value_amount: float) -> ShippingCategory:
    """Return the first matching shipping category, else special handling."""

    for matches, category in CATEGORY_RULES:
        if matches(weight_kg, value_amount):
            return category
    return ShippingCategory.SPECIAL_HANDLING
