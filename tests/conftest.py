"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from nutrition_labels.adapters.analysis_client import AnalysisClient
from nutrition_labels.config import Settings
from nutrition_labels.containers import AppContainer
from nutrition_labels.domain.records import StoredNutritionRecord
from nutrition_labels.services.analysis import AnalysisService
from nutrition_labels.services.cache import InMemoryCache
from nutrition_labels.services.labels import LabelService
from nutrition_labels.services.normalizer import normalize_stored_payload
from nutrition_labels.services.records import NutritionRecordRepository, RecordService


def make_analysis_payload() -> dict[str, object]:
    """Recipe analysis response for four servings of a vegetable lasagna."""
    return {
        "calories": 1200,
        "totalWeight": 800,
        "yield": 4,
        "dietLabels": ["HIGH_FIBER"],
        "healthLabels": ["VEGETARIAN", "PEANUT_FREE", "TREE_NUT_FREE"],
        "cautions": ["SULFITES"],
        "totalNutrients": {
            "ENERC_KCAL": {"label": "Energy", "quantity": 1200, "unit": "kcal"},
            "FAT": {"label": "Fat", "quantity": 40, "unit": "g"},
            "FASAT": {"label": "Saturated", "quantity": 12, "unit": "g"},
            "FATRN": {"label": "Trans", "quantity": 0.4, "unit": "g"},
            "FAMS": {"label": "Monounsaturated", "quantity": 15, "unit": "g"},
            "FAPU": {"label": "Polyunsaturated", "quantity": 8, "unit": "g"},
            "CHOLE": {"label": "Cholesterol", "quantity": 200, "unit": "mg"},
            "NA": {"label": "Sodium", "quantity": 2800, "unit": "mg"},
            "CHOCDF": {"label": "Carbs", "quantity": 160, "unit": "g"},
            "FIBTG": {"label": "Fiber", "quantity": 24, "unit": "g"},
            "SUGAR": {"label": "Sugars", "quantity": 40, "unit": "g"},
            "SUGAR.added": {"label": "Sugars, added", "quantity": 20, "unit": "g"},
            "PROCNT": {"label": "Protein", "quantity": 48, "unit": "g"},
            "VITD": {"label": "Vitamin D", "quantity": 8, "unit": "µg"},
            "CA": {"label": "Calcium", "quantity": 520, "unit": "mg"},
            "FE": {"label": "Iron", "quantity": 14.4, "unit": "mg"},
            "K": {"label": "Potassium", "quantity": 2350, "unit": "mg"},
            "VITC": {"label": "Vitamin C", "quantity": 36, "unit": "mg"},
            "VITA_RAE": {"label": "Vitamin A", "quantity": 360, "unit": "µg"},
        },
        "totalDaily": {
            "FAT": {"label": "Fat", "quantity": 61.53846, "unit": "%"},
            "NA": {"label": "Sodium", "quantity": 121.7, "unit": "%"},
            "FIBTG": {"label": "Fiber", "quantity": 96, "unit": "%"},
            "CA": {"label": "Calcium", "quantity": 40, "unit": "%"},
            "SUGAR.added": {"label": "Sugars, added", "quantity": 80, "unit": "%"},
        },
        "nutritionSummary": {
            "calories": 1200,
            "macronutrients": {
                "protein": {"grams": 48, "calories": 192, "percentage": 16},
                "carbs": {"grams": 160, "calories": 640, "percentage": 53},
                "fat": {"grams": 40, "calories": 360, "percentage": 30},
            },
            "fiber": 24,
            "sodium": 2800,
            "sugar": 40,
        },
    }


@dataclass
class FakeAnalysisClient(AnalysisClient):
    """Fake analysis client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=make_analysis_payload)
    failures: list[Exception] = field(default_factory=list)
    calls: list[tuple[str, list[str]]] = field(default_factory=list)
    closed: bool = False

    async def analyze_recipe(
        self, title: str, ingredients: list[str]
    ) -> dict[str, object]:
        self.calls.append((title, ingredients))
        if self.failures:
            raise self.failures.pop(0)
        return self.payload

    async def close(self) -> None:
        self.closed = True


@dataclass
class InMemoryRecordRepository(NutritionRecordRepository):
    """In-memory nutrition record repository for tests."""

    rows: list[dict[str, object]] = field(default_factory=list)

    def save_record(
        self, product_id: str, payload: dict[str, object]
    ) -> StoredNutritionRecord:
        created_at = datetime(2024, 1, 1, tzinfo=UTC) + timedelta(
            minutes=len(self.rows)
        )
        row = {
            "id": str(uuid4()),
            "product_id": product_id,
            "created_at": created_at.isoformat(),
            **payload,
        }
        self.rows.append(row)
        return _to_stored(row)

    def get_latest(self, product_id: str) -> StoredNutritionRecord | None:
        history = self.list_history(product_id, limit=1)
        return history[0] if history else None

    def list_history(self, product_id: str, limit: int) -> list[StoredNutritionRecord]:
        matching = [row for row in self.rows if row["product_id"] == product_id]
        matching.sort(key=lambda row: str(row["created_at"]), reverse=True)
        return [_to_stored(row) for row in matching[:limit]]


def _to_stored(row: dict[str, object]) -> StoredNutritionRecord:
    return StoredNutritionRecord(
        id=UUID(str(row["id"])),
        product_id=str(row["product_id"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        record=normalize_stored_payload(row),
    )


@pytest.fixture
def analysis_payload() -> dict[str, object]:
    return make_analysis_payload()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        admin_token="admin-token",
        analysis_app_id="app-id",
        analysis_app_key="app-key",
    )


@pytest.fixture
def analysis_client() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture
def record_repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def container(
    settings: Settings,
    analysis_client: FakeAnalysisClient,
    record_repository: InMemoryRecordRepository,
) -> AppContainer:
    analysis_service = AnalysisService(
        client=analysis_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )
    record_service = RecordService(
        repository=record_repository,
        thresholds=settings.threshold_settings(),
    )
    label_service = LabelService(cache=InMemoryCache())

    async def close_resources() -> None:
        await analysis_client.close()

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        record_service=record_service,
        label_service=label_service,
        close_resources=close_resources,
    )
