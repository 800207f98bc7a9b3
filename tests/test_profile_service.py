"""Tests for profile service."""

from datetime import date
from uuid import uuid4

from health_tracker.services.profiles import ProfileService
from tests.conftest import InMemoryProfileRepository


def test_get_profile_defaults_when_missing() -> None:
    user_id = uuid4()
    service = ProfileService(InMemoryProfileRepository())

    profile = service.get_profile(user_id)

    assert profile.user_id == user_id
    assert profile.display_name is None
    assert profile.is_premium is False


def test_update_profile_merges_fields() -> None:
    user_id = uuid4()
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)

    service.update_profile(
        user_id, {"display_name": "Sam", "birth_date": date(1990, 6, 1)}
    )
    updated = service.update_profile(user_id, {"weight_kg": 71.5, "user_id": uuid4()})

    assert updated.user_id == user_id
    assert updated.display_name == "Sam"
    assert updated.birth_date == date(1990, 6, 1)
    assert updated.weight_kg == 71.5
    assert updated.updated_at is not None
    assert repository.profiles[user_id] == updated


def test_update_profile_ignores_premium_flag() -> None:
    user_id = uuid4()
    service = ProfileService(InMemoryProfileRepository())

    updated = service.update_profile(
        user_id, {"display_name": "Sam", "is_premium": True}
    )

    assert updated.display_name == "Sam"
    assert updated.is_premium is False
