"""Pydantic request models for the HTTP API."""

import base64
import binascii
from datetime import date

from pydantic import BaseModel, Field, field_validator

from health_tracker.domain.nutrients import Meal, NutrientProfile


class MealRequest(BaseModel):
    """Meal with explicit nutrient amounts keyed by nutrient name."""

    name: str = Field(min_length=1, max_length=200)
    nutrients: dict[str, object] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value.strip()

    def to_meal(self) -> Meal:
        return Meal(
            name=self.name,
            nutrients=NutrientProfile.from_mapping(self.nutrients),
        )


class FoodLookupRequest(BaseModel):
    """Food name to look up and log."""

    food_name: str = Field(min_length=1, max_length=200)

    @field_validator("food_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("food_name must not be blank")
        return value.strip()


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields keep their stored values."""

    display_name: str | None = Field(default=None, max_length=100)
    birth_date: date | None = None
    sex: str | None = Field(default=None, max_length=20)
    height_cm: float | None = Field(default=None, gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    activity_level: str | None = Field(default=None, max_length=40)


class BloodTestRequest(BaseModel):
    """Manually entered blood marker values."""

    taken_on: date
    values: dict[str, object]


class LabReportRequest(BaseModel):
    """Photographed lab report as raw base64 (no data-url prefix)."""

    image_base64: str = Field(min_length=4)
    taken_on: date | None = None

    @field_validator("image_base64")
    @classmethod
    def _valid_base64(cls, value: str) -> str:
        try:
            decoded = base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError("image_base64 is not valid base64") from exc
        if not decoded:
            raise ValueError("image_base64 decodes to an empty image")
        return value

    def image_bytes(self) -> bytes:
        return base64.b64decode(self.image_base64)
