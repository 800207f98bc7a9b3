"""Nutrition lookups and menu suggestions backed by a generative model."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from health_tracker.domain.nutrients import (
    NUTRIENT_LIMITS,
    DailyStatus,
    Meal,
    NutrientProfile,
)
from health_tracker.domain.nutrition import FoodEstimate, MenuSuggestions
from health_tracker.services.cache import Cache
from health_tracker.services.generative import (
    GenerativeClient,
    food_schema,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

MAX_SUGGESTIONS = 10

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Service for AI nutrient estimates with caching and a short retry."""

    client: GenerativeClient
    cache: Cache
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    lookup_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def lookup_food(self, food_name: str) -> Meal:
        """Estimate nutrients for one typical serving of a named food."""
        name = food_name.strip()
        if not name:
            raise ValueError("Food name must not be blank")
        cache_key = f"food:{name.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, Meal):
            return cached

        prompt = (
            f"Estimate the nutrition facts for one typical serving of: {name}. "
            "Use grams for macronutrients and fiber, milligrams for cholesterol, "
            "sodium, potassium, calcium and magnesium, and kcal for calories."
        )
        raw = await self._call_with_retry(
            lambda: self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=food_schema(),
                schema_name="food_lookup",
            ),
            action=f"lookup:{name}",
        )
        estimate = FoodEstimate.model_validate(raw)
        meal = Meal(
            name=estimate.name.strip() or name,
            nutrients=NutrientProfile.from_mapping(estimate.nutrients),
        )
        self.cache.set(cache_key, meal, ttl_seconds=self.lookup_ttl_seconds)
        return meal

    async def suggest_menu(
        self, totals: NutrientProfile, status: DailyStatus, count: int = 3
    ) -> list[Meal]:
        """Suggest meals that move the day's totals toward the limits."""
        if not 1 <= count <= MAX_SUGGESTIONS:
            raise ValueError(f"count must be between 1 and {MAX_SUGGESTIONS}")
        prompt = (
            f"Suggest {count} meals for the rest of the day. "
            f"Today's status is {status.value}. "
            f"Intake so far: {json.dumps(totals.as_mapping())}. "
            f"Daily limits: {json.dumps(NUTRIENT_LIMITS.as_mapping())}. "
            "Favour nutrients that are low and avoid those already high. "
            "Give each meal a short name and its nutrition facts."
        )
        schema: dict[str, object] = {
            "type": "object",
            "properties": {"suggestions": {"type": "array", "items": food_schema()}},
            "required": ["suggestions"],
            "additionalProperties": False,
        }
        raw = await self._call_with_retry(
            lambda: self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=schema,
                schema_name="menu_suggestions",
            ),
            action="suggest_menu",
        )
        menu = MenuSuggestions.model_validate(raw)
        return [
            Meal(
                name=suggestion.name.strip(),
                nutrients=NutrientProfile.from_mapping(suggestion.nutrients),
            )
            for suggestion in menu.suggestions[:count]
        ]

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Nutrition %s failed (attempt %s/%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)
