"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_labels.adapters.analysis_client import HttpxAnalysisClient
from nutrition_labels.adapters.supabase_record_repository import (
    SupabaseNutritionRecordRepository,
)
from nutrition_labels.config import Settings, parse_nutrient_codes
from nutrition_labels.services.analysis import AnalysisService
from nutrition_labels.services.cache import InMemoryCache
from nutrition_labels.services.labels import LabelService
from nutrition_labels.services.records import RecordService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    record_service: RecordService
    label_service: LabelService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    record_repository = SupabaseNutritionRecordRepository(supabase_client)
    analysis_client = HttpxAnalysisClient.create(
        app_id=resolved_settings.analysis_app_id,
        app_key=resolved_settings.analysis_app_key,
        base_url=resolved_settings.analysis_base_url,
    )
    analysis_service = AnalysisService(
        client=analysis_client,
        cache=InMemoryCache(),
        debug=resolved_settings.debug,
    )
    record_service = RecordService(
        repository=record_repository,
        thresholds=resolved_settings.threshold_settings(),
    )
    label_service = LabelService(
        cache=InMemoryCache(),
        default_vitamins=parse_nutrient_codes(
            resolved_settings.label_default_vitamins
        ),
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await analysis_client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        record_service=record_service,
        label_service=label_service,
        close_resources=close_resources,
    )
