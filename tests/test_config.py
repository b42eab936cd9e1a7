"""Tests for application settings."""

from nutrition_labels.config import Settings, parse_nutrient_codes


def test_threshold_settings_from_config() -> None:
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        admin_token="admin-token",
        analysis_app_id="app-id",
        analysis_app_key="app-key",
        sodium_daily_limit=2000,
        thresholds_enabled=False,
    )

    thresholds = settings.threshold_settings()

    assert thresholds.sodium_daily_limit == 2000
    assert thresholds.fat_daily_limit == 65
    assert thresholds.enabled is False


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "env-key")
    monkeypatch.setenv("ADMIN_TOKEN", "env-admin")
    monkeypatch.setenv("ANALYSIS_APP_ID", "env-id")
    monkeypatch.setenv("ANALYSIS_APP_KEY", "env-app-key")
    monkeypatch.setenv("CALORIES_DAILY_LIMIT", "1800")

    settings = Settings()

    assert settings.supabase_url == "https://env.supabase.co"
    assert settings.analysis_base_url == "https://api.edamam.com"
    assert settings.threshold_settings().calories_daily_limit == 1800


def test_parse_nutrient_codes() -> None:
    assert parse_nutrient_codes(None) == ()
    assert parse_nutrient_codes("VITC, vitaminA,VITC,CA,bogus") == ("VITC", "VITA_RAE")
