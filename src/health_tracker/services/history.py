"""Nutrient intake history for charting."""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from health_tracker.domain.meals import DailySummary, NutrientHistory
from health_tracker.domain.nutrients import NUTRIENT_FIELDS, NutrientProfile
from health_tracker.services.ledger import build_daily_log
from health_tracker.services.meals import DailyLogRepository

MAX_HISTORY_DAYS = 366


@dataclass
class HistoryService:
    """Builds per-day totals and averages over a date range."""

    repository: DailyLogRepository

    def get_history(self, user_id: UUID, start: date, end: date) -> NutrientHistory:
        """Return one point per day from ``start`` to ``end`` inclusive."""
        if start > end:
            raise ValueError("start must not be after end")
        days = (end - start).days + 1
        if days > MAX_HISTORY_DAYS:
            raise ValueError(f"range must not exceed {MAX_HISTORY_DAYS} days")

        stored = self.repository.list_meals_between(user_id, start, end)
        daily = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            log = build_daily_log(day, stored.get(day, []))
            daily.append(
                DailySummary(
                    day=day,
                    meal_count=len(log.meals),
                    totals=log.daily_totals,
                    status=log.status,
                )
            )
        return NutrientHistory(
            start=start, end=end, daily=daily, averages=_average(daily)
        )


def _average(daily: list[DailySummary]) -> NutrientProfile:
    total_days = max(len(daily), 1)
    return NutrientProfile(
        **{
            attr: math.fsum(getattr(entry.totals, attr) for entry in daily)
            / total_days
            for attr in NUTRIENT_FIELDS.values()
        }
    )
