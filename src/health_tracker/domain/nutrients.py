"""Nutrient domain models and the daily limits table."""

import math
from dataclasses import dataclass
from enum import StrEnum

# Wire key -> attribute name. Order is the display order.
NUTRIENT_FIELDS: dict[str, str] = {
    "calories": "calories",
    "carbohydrates": "carbohydrates",
    "sugars": "sugars",
    "fiber": "fiber",
    "protein": "protein",
    "totalFat": "total_fat",
    "saturatedFat": "saturated_fat",
    "unsaturatedFat": "unsaturated_fat",
    "cholesterol": "cholesterol",
    "sodium": "sodium",
    "potassium": "potassium",
    "calcium": "calcium",
    "magnesium": "magnesium",
}

NUTRIENT_KEYS: tuple[str, ...] = tuple(NUTRIENT_FIELDS)


@dataclass(frozen=True)
class NutrientProfile:
    """Amounts per nutrient; every field defaults to zero."""

    calories: float = 0.0
    carbohydrates: float = 0.0
    sugars: float = 0.0
    fiber: float = 0.0
    protein: float = 0.0
    total_fat: float = 0.0
    saturated_fat: float = 0.0
    unsaturated_fat: float = 0.0
    cholesterol: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0
    calcium: float = 0.0
    magnesium: float = 0.0

    @classmethod
    def from_mapping(cls, raw: object) -> "NutrientProfile":
        """Build a profile from a camelCase mapping, zeroing malformed values.

        Missing keys, non-numeric values, negatives and non-finite numbers all
        become 0. Anything that is not a mapping yields an empty profile.
        """
        if not isinstance(raw, dict):
            return cls()
        values = {
            attr: to_amount(raw.get(key)) for key, attr in NUTRIENT_FIELDS.items()
        }
        return cls(**values)

    def as_mapping(self) -> dict[str, float]:
        """Return the profile keyed by wire (camelCase) nutrient names."""
        return {key: getattr(self, attr) for key, attr in NUTRIENT_FIELDS.items()}

    def amount(self, key: str) -> float:
        """Return the amount for a wire key such as ``totalFat``."""
        return getattr(self, NUTRIENT_FIELDS[key])


def to_amount(value: object) -> float:
    """Coerce a raw nutrient value to a non-negative finite float."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        amount = float(value)
    elif isinstance(value, str):
        try:
            amount = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


class DailyStatus(StrEnum):
    """Coarse classification of a day's totals against the limits."""

    NORMAL = "Normal"
    EXCESS = "Excess"
    DEFICIENT = "Deficient"


NUTRIENT_LIMITS = NutrientProfile(
    calories=2000,
    carbohydrates=250,
    sugars=50,
    fiber=30,
    protein=75,
    total_fat=60,
    saturated_fat=20,
    unsaturated_fat=40,
    cholesterol=300,
    sodium=2300,
    potassium=4700,
    calcium=1000,
    magnesium=400,
)


@dataclass(frozen=True)
class Meal:
    """A named meal with its nutrient amounts."""

    name: str
    nutrients: NutrientProfile

    @classmethod
    def from_mapping(cls, raw: object) -> "Meal":
        """Parse a stored ``{name, nutrients}`` record leniently."""
        if not isinstance(raw, dict):
            return cls(name="", nutrients=NutrientProfile())
        name = raw.get("name")
        return cls(
            name=name if isinstance(name, str) else "",
            nutrients=NutrientProfile.from_mapping(raw.get("nutrients")),
        )

    def as_mapping(self) -> dict[str, object]:
        """Return the stored record shape."""
        return {"name": self.name, "nutrients": self.nutrients.as_mapping()}
