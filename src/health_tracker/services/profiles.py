"""User profile business logic."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from health_tracker.domain.profiles import PROFILE_FIELDS, UserProfile


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile, if present."""

    def save_profile(self, profile: UserProfile) -> None:
        """Create or replace the profile row."""


@dataclass
class ProfileService:
    """Application service for reading and merging profile changes."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the stored profile or an empty one."""
        return self.repository.get_profile(user_id) or UserProfile(user_id=user_id)

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Merge the given fields into the stored profile.

        Keys outside the profile's editable fields are ignored.
        """
        current = self.get_profile(user_id)
        accepted = {
            key: value for key, value in changes.items() if key in PROFILE_FIELDS
        }
        updated = replace(current, **accepted, updated_at=datetime.now(tz=UTC))
        self.repository.save_profile(updated)
        return updated
