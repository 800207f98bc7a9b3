"""Daily nutrient ledger: aggregation, status rules and meal mutations.

Everything here is pure. Callers load a log, apply a mutation and persist the
returned log; totals and status are always rebuilt from the meal sequence.
"""

import math
from collections.abc import Sequence
from datetime import date

from health_tracker.domain.meals import DailyLog
from health_tracker.domain.nutrients import (
    NUTRIENT_FIELDS,
    NUTRIENT_LIMITS,
    DailyStatus,
    Meal,
    NutrientProfile,
)

# (nutrient key, multiple of the limit). Any breach decides the tier.
EXCESS_RULES: tuple[tuple[str, float], ...] = (
    ("calories", 1.1),
    ("protein", 1.5),
    ("totalFat", 1.5),
    ("sugars", 1.5),
    ("sodium", 1.5),
)
DEFICIENT_RULES: tuple[tuple[str, float], ...] = (
    ("calories", 0.9),
    ("protein", 0.7),
    ("fiber", 0.7),
)


class MealIndexOutOfRangeError(IndexError):
    """Raised when a meal position does not exist in the day's log."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Meal index {index} out of range for {size} meal(s)")
        self.index = index
        self.size = size


def aggregate_meals(meals: Sequence[Meal]) -> NutrientProfile:
    """Sum each nutrient across meals.

    ``math.fsum`` is exactly rounded, so the result does not depend on the
    order of the meals.
    """
    totals = {
        attr: math.fsum(getattr(meal.nutrients, attr) for meal in meals)
        for attr in NUTRIENT_FIELDS.values()
    }
    return NutrientProfile(**totals)


def classify_status(
    totals: NutrientProfile, limits: NutrientProfile = NUTRIENT_LIMITS
) -> DailyStatus:
    """Classify totals; Excess wins over Deficient."""
    if any(
        totals.amount(key) > limits.amount(key) * factor
        for key, factor in EXCESS_RULES
    ):
        return DailyStatus.EXCESS
    if any(
        totals.amount(key) < limits.amount(key) * factor
        for key, factor in DEFICIENT_RULES
    ):
        return DailyStatus.DEFICIENT
    return DailyStatus.NORMAL


def build_daily_log(day: date, meals: Sequence[Meal]) -> DailyLog:
    """Create a log for the meals with freshly computed totals and status."""
    totals = aggregate_meals(meals)
    return DailyLog(
        day=day,
        meals=tuple(meals),
        daily_totals=totals,
        status=classify_status(totals),
    )


def add_meal(log: DailyLog, meal: Meal) -> DailyLog:
    """Return a new log with the meal appended."""
    return build_daily_log(log.day, (*log.meals, meal))


def delete_meal(log: DailyLog, index: int) -> DailyLog:
    """Return a new log without the meal at ``index``.

    Negative indices are rejected like any other out-of-range position.
    """
    if not 0 <= index < len(log.meals):
        raise MealIndexOutOfRangeError(index, len(log.meals))
    remaining = log.meals[:index] + log.meals[index + 1 :]
    return build_daily_log(log.day, remaining)
