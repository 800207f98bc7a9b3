"""Domain models for daily meal logs."""

from dataclasses import dataclass
from datetime import date

from health_tracker.domain.nutrients import DailyStatus, Meal, NutrientProfile


@dataclass(frozen=True)
class DailyLog:
    """One user's meals for a calendar day with derived totals and status."""

    day: date
    meals: tuple[Meal, ...]
    daily_totals: NutrientProfile
    status: DailyStatus

    def as_record(self) -> dict[str, object]:
        """Return the persisted document shape."""
        return {
            "meals": [meal.as_mapping() for meal in self.meals],
            "dailyTotals": self.daily_totals.as_mapping(),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class DailySummary:
    """Chart point for a single day."""

    day: date
    meal_count: int
    totals: NutrientProfile
    status: DailyStatus


@dataclass(frozen=True)
class NutrientHistory:
    """Daily points and per-nutrient averages over a date range."""

    start: date
    end: date
    daily: list[DailySummary]
    averages: NutrientProfile
