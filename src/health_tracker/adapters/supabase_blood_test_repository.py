"""Supabase repository for blood-test records."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from health_tracker.domain.blood_tests import BloodTestRecord, BloodTestSource
from health_tracker.services.blood_tests import BloodTestRepository, sanitize_values


@dataclass
class SupabaseBloodTestRepository(BloodTestRepository):
    """Supabase implementation for blood-test records."""

    client: Client

    def get_record(self, user_id: UUID, taken_on: date) -> BloodTestRecord | None:
        """Return the record for a user and day."""
        response = (
            self.client.table("blood_tests")
            .select("user_id, taken_on, values, source")
            .eq("user_id", str(user_id))
            .eq("taken_on", taken_on.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_record(self, record: BloodTestRecord) -> None:
        """Upsert the record for its day."""
        response = (
            self.client.table("blood_tests")
            .upsert(
                {
                    "user_id": str(record.user_id),
                    "taken_on": record.taken_on.isoformat(),
                    "values": record.values,
                    "source": record.source.value,
                },
                on_conflict="user_id,taken_on",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save blood test")

    def list_records(self, user_id: UUID, limit: int) -> list[BloodTestRecord]:
        """Return recent records for a user."""
        response = (
            self.client.table("blood_tests")
            .select("user_id, taken_on, values, source")
            .eq("user_id", str(user_id))
            .order("taken_on", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> BloodTestRecord:
    values = row.get("values")
    source = row.get("source")
    return BloodTestRecord(
        user_id=UUID(str(row["user_id"])),
        taken_on=date.fromisoformat(str(row["taken_on"])),
        values=sanitize_values(values) if isinstance(values, dict) else {},
        source=BloodTestSource(source)
        if source in {member.value for member in BloodTestSource}
        else BloodTestSource.MANUAL,
    )
