"""Models for AI nutrition lookups and menu suggestions."""

from pydantic import BaseModel, Field


class FoodEstimate(BaseModel):
    """A single food with raw nutrient values from the model.

    Nutrient values are kept loose here; they are coerced into a
    ``NutrientProfile`` afterwards, where malformed values become zero.
    """

    name: str = Field(min_length=1)
    nutrients: dict[str, object] = Field(default_factory=dict)


class MenuSuggestions(BaseModel):
    """Structured output for menu generation."""

    suggestions: list[FoodEstimate]
