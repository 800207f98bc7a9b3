"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from health_tracker.adapters.openai_generative_client import OpenAIGenerativeClient
from health_tracker.adapters.supabase_blood_test_repository import (
    SupabaseBloodTestRepository,
)
from health_tracker.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from health_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from health_tracker.config import Settings
from health_tracker.services.blood_tests import BloodTestService
from health_tracker.services.cache import InMemoryCache
from health_tracker.services.history import HistoryService
from health_tracker.services.lab_reports import LabReportService
from health_tracker.services.meals import MealLogService
from health_tracker.services.nutrition import NutritionService
from health_tracker.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    nutrition_service: NutritionService
    meal_log_service: MealLogService
    history_service: HistoryService
    blood_test_service: BloodTestService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    daily_log_repository = SupabaseDailyLogRepository(supabase_client)
    generative_client = OpenAIGenerativeClient.create(resolved_settings.openai_api_key)
    nutrition_service = NutritionService(
        client=generative_client,
        cache=InMemoryCache(),
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        lookup_ttl_seconds=resolved_settings.lookup_cache_ttl_seconds,
    )
    lab_report_service = LabReportService(
        client=generative_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await generative_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=ProfileService(SupabaseProfileRepository(supabase_client)),
        nutrition_service=nutrition_service,
        meal_log_service=MealLogService(
            repository=daily_log_repository,
            nutrition_service=nutrition_service,
        ),
        history_service=HistoryService(daily_log_repository),
        blood_test_service=BloodTestService(
            repository=SupabaseBloodTestRepository(supabase_client),
            lab_report_service=lab_report_service,
        ),
        close_resources=close_resources,
    )
