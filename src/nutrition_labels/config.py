"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutrition_labels.domain import catalog
from nutrition_labels.domain.warnings import ThresholdSettings

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    analysis_app_id: str
    analysis_app_key: str
    analysis_base_url: str = "https://api.edamam.com"
    sodium_daily_limit: float = 2300.0
    calories_daily_limit: float = 2000.0
    fat_daily_limit: float = 65.0
    sugar_daily_limit: float = 50.0
    thresholds_enabled: bool = True
    label_default_vitamins: str | None = None
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def threshold_settings(self) -> ThresholdSettings:
        """Return the configured threshold limits."""
        return ThresholdSettings(
            sodium_daily_limit=self.sodium_daily_limit,
            calories_daily_limit=self.calories_daily_limit,
            fat_daily_limit=self.fat_daily_limit,
            sugar_daily_limit=self.sugar_daily_limit,
            enabled=self.thresholds_enabled,
        )


def parse_nutrient_codes(raw: str | None) -> tuple[str, ...]:
    """Parse a comma-separated list of vitamin/mineral codes or aliases."""
    if raw is None:
        return ()
    codes: list[str] = []
    for chunk in raw.split(","):
        code = catalog.resolve_code(chunk)
        if code in catalog.SELECTABLE_MICRONUTRIENTS and code not in codes:
            codes.append(code)
    return tuple(codes)
