"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from health_tracker.domain.profiles import UserProfile
from health_tracker.services.profiles import ProfileRepository

_COLUMNS = (
    "user_id, display_name, birth_date, sex, height_cm, weight_kg, "
    "activity_level, is_premium, updated_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, profile: UserProfile) -> None:
        """Upsert the profile row."""
        response = (
            self.client.table("profiles")
            .upsert(
                {
                    "user_id": str(profile.user_id),
                    "display_name": profile.display_name,
                    "birth_date": profile.birth_date.isoformat()
                    if profile.birth_date
                    else None,
                    "sex": profile.sex,
                    "height_cm": profile.height_cm,
                    "weight_kg": profile.weight_kg,
                    "activity_level": profile.activity_level,
                    "is_premium": profile.is_premium,
                    "updated_at": profile.updated_at.isoformat()
                    if profile.updated_at
                    else None,
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save profile in Supabase")


def _parse_profile(row: dict[str, object]) -> UserProfile:
    birth_date = row.get("birth_date")
    updated_at = row.get("updated_at")
    return UserProfile(
        user_id=UUID(str(row["user_id"])),
        display_name=row.get("display_name"),
        birth_date=date.fromisoformat(birth_date)
        if isinstance(birth_date, str) and birth_date
        else None,
        sex=row.get("sex"),
        height_cm=_optional_float(row.get("height_cm")),
        weight_kg=_optional_float(row.get("weight_kg")),
        activity_level=row.get("activity_level"),
        is_premium=bool(row.get("is_premium", False)),
        updated_at=datetime.fromisoformat(updated_at)
        if isinstance(updated_at, str) and updated_at
        else None,
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    return None
