"""Supabase repository for daily meal logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from health_tracker.domain.meals import DailyLog
from health_tracker.domain.nutrients import Meal
from health_tracker.services.meals import DailyLogRepository

_TABLE = "daily_logs"


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for daily logs.

    Rows hold ``meals`` as the source of truth; ``daily_totals`` and
    ``status`` are written alongside for readers of the raw table and are
    never read back.
    """

    client: Client

    def get_meals(self, user_id: UUID, day: date) -> list[Meal] | None:
        """Return the stored meals for a day."""
        response = (
            self.client.table(_TABLE)
            .select("day, meals")
            .eq("user_id", str(user_id))
            .eq("day", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meals(response.data[0].get("meals"))

    def save_daily_log(self, user_id: UUID, log: DailyLog) -> None:
        """Upsert the day's row with meals and cached totals."""
        record = log.as_record()
        response = (
            self.client.table(_TABLE)
            .upsert(
                {
                    "user_id": str(user_id),
                    "day": log.day.isoformat(),
                    "meals": record["meals"],
                    "daily_totals": record["dailyTotals"],
                    "status": record["status"],
                },
                on_conflict="user_id,day",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save daily log")

    def list_meals_between(
        self, user_id: UUID, start: date, end: date
    ) -> dict[date, list[Meal]]:
        """Return meals per day in the inclusive range."""
        response = (
            self.client.table(_TABLE)
            .select("day, meals")
            .eq("user_id", str(user_id))
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .order("day", desc=False)
            .execute()
        )
        meals_by_day: dict[date, list[Meal]] = {}
        for row in response.data or []:
            day_raw = row.get("day")
            if not isinstance(day_raw, str):
                continue
            meals_by_day[date.fromisoformat(day_raw)] = _parse_meals(row.get("meals"))
        return meals_by_day


def _parse_meals(raw: object) -> list[Meal]:
    if not isinstance(raw, list):
        return []
    return [Meal.from_mapping(entry) for entry in raw]
