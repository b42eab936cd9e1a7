"""Supabase repository for nutrition record history."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_labels.domain.records import StoredNutritionRecord
from nutrition_labels.domain.warnings import NutritionWarning, Severity, WarningType
from nutrition_labels.services.normalizer import normalize_stored_payload
from nutrition_labels.services.records import NutritionRecordRepository

_COLUMNS = (
    "id, product_id, created_at, basic_nutrition, macronutrients, micronutrients, "
    "daily_values, health_labels, diet_labels, allergens, cautions, warnings"
)


@dataclass
class SupabaseNutritionRecordRepository(NutritionRecordRepository):
    """Supabase-backed repository for the ``nutritional_data`` table."""

    client: Client

    def save_record(
        self, product_id: str, payload: dict[str, object]
    ) -> StoredNutritionRecord:
        """Insert a storage payload and return the saved entry."""
        response = (
            self.client.table("nutritional_data")
            .insert({"product_id": product_id, **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save nutrition record")
        return _parse_record(response.data[0])

    def get_latest(self, product_id: str) -> StoredNutritionRecord | None:
        """Return the most recent entry for a product, if any."""
        response = (
            self.client.table("nutritional_data")
            .select(_COLUMNS)
            .eq("product_id", product_id)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def list_history(self, product_id: str, limit: int) -> list[StoredNutritionRecord]:
        """Return entries for a product, newest first."""
        response = (
            self.client.table("nutritional_data")
            .select(_COLUMNS)
            .eq("product_id", product_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]


def _parse_record(row: dict[str, object]) -> StoredNutritionRecord:
    return StoredNutritionRecord(
        id=UUID(str(row["id"])),
        product_id=str(row.get("product_id", "")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        record=normalize_stored_payload(row),
        warnings=tuple(_parse_warnings(row.get("warnings"))),
    )


def _parse_warnings(raw: object) -> list[NutritionWarning]:
    if not isinstance(raw, list):
        return []
    warnings = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            warnings.append(
                NutritionWarning(
                    type=WarningType(item.get("type", "warning")),
                    message=str(item.get("message", "")),
                    severity=Severity(item.get("severity", "medium")),
                )
            )
        except ValueError:
            continue
    return warnings
