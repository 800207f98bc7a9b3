"""Daily meal log service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from health_tracker.domain.meals import DailyLog
from health_tracker.domain.nutrients import Meal
from health_tracker.services.ledger import add_meal, build_daily_log, delete_meal
from health_tracker.services.nutrition import NutritionService

_logger = logging.getLogger(__name__)


class DailyLogRepository(Protocol):
    """Persistence interface for daily logs."""

    def get_meals(self, user_id: UUID, day: date) -> list[Meal] | None:
        """Return the stored meals for a day, or None if no record exists."""

    def save_daily_log(self, user_id: UUID, log: DailyLog) -> None:
        """Create or replace the record for ``log.day``."""

    def list_meals_between(
        self, user_id: UUID, start: date, end: date
    ) -> dict[date, list[Meal]]:
        """Return stored meals per day for ``start <= day <= end``."""


@dataclass
class MealLogService:
    """Loads, mutates and persists a user's daily logs."""

    repository: DailyLogRepository
    nutrition_service: NutritionService

    def get_daily_log(self, user_id: UUID, day: date) -> DailyLog:
        """Return the day's log, creating an empty record on first access."""
        meals = self.repository.get_meals(user_id, day)
        if meals is None:
            log = build_daily_log(day, [])
            self.repository.save_daily_log(user_id, log)
            return log
        return build_daily_log(day, meals)

    def add_meal(self, user_id: UUID, day: date, meal: Meal) -> DailyLog:
        """Append a meal and persist the recomputed log."""
        updated = add_meal(self._load(user_id, day), meal)
        self.repository.save_daily_log(user_id, updated)
        _logger.info(
            "Meal added",
            extra={"user_id": str(user_id), "day": day.isoformat(), "meal": meal.name},
        )
        return updated

    def delete_meal(self, user_id: UUID, day: date, index: int) -> DailyLog:
        """Remove the meal at ``index`` and persist the recomputed log."""
        updated = delete_meal(self._load(user_id, day), index)
        self.repository.save_daily_log(user_id, updated)
        return updated

    async def add_meal_by_name(
        self, user_id: UUID, day: date, food_name: str
    ) -> DailyLog:
        """Look up a food's nutrients and log it as a meal."""
        meal = await self.nutrition_service.lookup_food(food_name)
        return self.add_meal(user_id, day, meal)

    def _load(self, user_id: UUID, day: date) -> DailyLog:
        return build_daily_log(day, self.repository.get_meals(user_id, day) or [])
