"""User-scoped API endpoints with simple token auth."""

from __future__ import annotations

import logging
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from health_tracker.api.models import (  # noqa: TC001
    BloodTestRequest,
    FoodLookupRequest,
    LabReportRequest,
    MealRequest,
    ProfileUpdateRequest,
)
from health_tracker.domain.nutrients import NUTRIENT_LIMITS
from health_tracker.services.ledger import MealIndexOutOfRangeError
from health_tracker.services.nutrition import MAX_SUGGESTIONS

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer
    from health_tracker.domain.blood_tests import BloodTestRecord
    from health_tracker.domain.meals import DailyLog, NutrientHistory
    from health_tracker.domain.nutrients import Meal
    from health_tracker.domain.profiles import UserProfile

_logger = logging.getLogger(__name__)


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(dependencies=[Depends(require_api_token)])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/nutrients/limits")
async def nutrient_limits() -> dict[str, object]:
    """Return the daily limit per nutrient."""
    return {"limits": NUTRIENT_LIMITS.as_mapping()}


@router.get("/users/{user_id}/profile")
async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's profile."""
    profile = _container(request).profile_service.get_profile(user_id)
    return _serialize_profile(profile)


@router.put("/users/{user_id}/profile")
async def update_profile(
    user_id: UUID, payload: ProfileUpdateRequest, request: Request
) -> dict[str, object]:
    """Merge the provided fields into the user's profile."""
    changes = payload.model_dump(exclude_unset=True)
    profile = _container(request).profile_service.update_profile(user_id, changes)
    return _serialize_profile(profile)


@router.get("/users/{user_id}/blood-tests")
async def list_blood_tests(
    user_id: UUID, request: Request, limit: int = Query(default=20, ge=1, le=100)
) -> dict[str, object]:
    """Return recent blood-test records."""
    records = _container(request).blood_test_service.list_records(user_id, limit)
    return {"records": [_serialize_blood_test(record) for record in records]}


@router.post("/users/{user_id}/blood-tests")
async def record_blood_test(
    user_id: UUID, payload: BloodTestRequest, request: Request
) -> dict[str, object]:
    """Record manually entered blood marker values."""
    record = _container(request).blood_test_service.record(
        user_id, payload.taken_on, payload.values
    )
    return _serialize_blood_test(record)


@router.post("/users/{user_id}/blood-tests/lab-report")
async def record_lab_report(
    user_id: UUID, payload: LabReportRequest, request: Request
) -> dict[str, object]:
    """Extract blood marker values from a lab-report photo and record them."""
    try:
        record = await _container(request).blood_test_service.record_from_lab_report(
            user_id, payload.image_bytes(), taken_on=payload.taken_on
        )
    except Exception as exc:
        _logger.exception("Lab report extraction failed", extra={"user_id": user_id})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Couldn't read that lab report. Please try a clearer photo.",
        ) from exc
    return _serialize_blood_test(record)


@router.get("/users/{user_id}/logs/{day}")
async def get_daily_log(
    user_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Return the day's meals, totals and status."""
    log = _container(request).meal_log_service.get_daily_log(user_id, day)
    return _serialize_daily_log(log)


@router.post("/users/{user_id}/logs/{day}/meals")
async def add_meal(
    user_id: UUID, day: date, payload: MealRequest, request: Request
) -> dict[str, object]:
    """Log a meal with explicit nutrients."""
    log = _container(request).meal_log_service.add_meal(
        user_id, day, payload.to_meal()
    )
    return _serialize_daily_log(log)


@router.post("/users/{user_id}/logs/{day}/meals/lookup")
async def add_meal_by_name(
    user_id: UUID, day: date, payload: FoodLookupRequest, request: Request
) -> dict[str, object]:
    """Look up a food's nutrients and log it."""
    container = _container(request)
    try:
        meal = await container.nutrition_service.lookup_food(payload.food_name)
    except Exception as exc:
        _logger.exception(
            "Nutrition lookup failed", extra={"food_name": payload.food_name}
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Couldn't look up that food right now.",
        ) from exc
    log = container.meal_log_service.add_meal(user_id, day, meal)
    return _serialize_daily_log(log)


@router.delete("/users/{user_id}/logs/{day}/meals/{index}")
async def delete_meal(
    user_id: UUID, day: date, index: int, request: Request
) -> dict[str, object]:
    """Remove the meal at a position in the day's log."""
    try:
        log = _container(request).meal_log_service.delete_meal(user_id, day, index)
    except MealIndexOutOfRangeError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return _serialize_daily_log(log)


@router.get("/users/{user_id}/logs/{day}/suggestions")
async def suggest_menu(
    user_id: UUID,
    day: date,
    request: Request,
    count: int = Query(default=3, ge=1, le=MAX_SUGGESTIONS),
) -> dict[str, object]:
    """Suggest meals based on the day's intake so far."""
    container = _container(request)
    log = container.meal_log_service.get_daily_log(user_id, day)
    try:
        suggestions = await container.nutrition_service.suggest_menu(
            log.daily_totals, log.status, count=count
        )
    except Exception as exc:
        _logger.exception("Menu suggestion failed", extra={"user_id": user_id})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Couldn't generate suggestions right now.",
        ) from exc
    return {
        "day": day.isoformat(),
        "status": log.status.value,
        "suggestions": [_serialize_meal(meal) for meal in suggestions],
    }


@router.get("/users/{user_id}/history")
async def get_history(
    user_id: UUID, start: date, end: date, request: Request
) -> dict[str, object]:
    """Return per-day totals and averages for charting."""
    try:
        history = _container(request).history_service.get_history(user_id, start, end)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _serialize_history(history)


def _serialize_meal(meal: Meal) -> dict[str, object]:
    return meal.as_mapping()


def _serialize_daily_log(log: DailyLog) -> dict[str, object]:
    return {"day": log.day.isoformat(), **log.as_record()}


def _serialize_history(history: NutrientHistory) -> dict[str, object]:
    return {
        "start": history.start.isoformat(),
        "end": history.end.isoformat(),
        "averages": history.averages.as_mapping(),
        "daily": [
            {
                "day": entry.day.isoformat(),
                "mealCount": entry.meal_count,
                "totals": entry.totals.as_mapping(),
                "status": entry.status.value,
            }
            for entry in history.daily
        ],
    }


def _serialize_profile(profile: UserProfile) -> dict[str, object]:
    return {
        "user_id": str(profile.user_id),
        "display_name": profile.display_name,
        "birth_date": profile.birth_date.isoformat() if profile.birth_date else None,
        "sex": profile.sex,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "activity_level": profile.activity_level,
        "is_premium": profile.is_premium,
        "updated_at": profile.updated_at.isoformat() if profile.updated_at else None,
    }


def _serialize_blood_test(record: BloodTestRecord) -> dict[str, object]:
    return {
        "user_id": str(record.user_id),
        "taken_on": record.taken_on.isoformat(),
        "values": record.values,
        "source": record.source.value,
    }
