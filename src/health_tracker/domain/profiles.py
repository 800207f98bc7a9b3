"""User profile domain model."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

PROFILE_FIELDS: tuple[str, ...] = (
    "display_name",
    "birth_date",
    "sex",
    "height_cm",
    "weight_kg",
    "activity_level",
)


@dataclass(frozen=True)
class UserProfile:
    """Personal details a user keeps alongside their logs."""

    user_id: UUID
    display_name: str | None = None
    birth_date: date | None = None
    sex: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: str | None = None
    is_premium: bool = False
    updated_at: datetime | None = None
