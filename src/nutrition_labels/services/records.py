"""Services for saving and loading nutrition records."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from nutrition_labels.domain.nutrition import CanonicalNutritionRecord
from nutrition_labels.domain.records import StoredNutritionRecord
from nutrition_labels.domain.warnings import ThresholdSettings
from nutrition_labels.services.compliance import build_compliance_report
from nutrition_labels.services.normalizer import to_storage_payload

_logger = logging.getLogger(__name__)


class NutritionRecordRepository(Protocol):
    """Persistence interface for nutrition record history."""

    def save_record(
        self, product_id: str, payload: dict[str, object]
    ) -> StoredNutritionRecord:
        """Insert a storage payload and return the saved entry."""

    def get_latest(self, product_id: str) -> StoredNutritionRecord | None:
        """Return the most recent entry for a product, if any."""

    def list_history(self, product_id: str, limit: int) -> list[StoredNutritionRecord]:
        """Return entries for a product, newest first."""


@dataclass
class RecordService:
    """Application service for nutrition record history."""

    repository: NutritionRecordRepository
    thresholds: ThresholdSettings = field(default_factory=ThresholdSettings)

    def save(
        self, product_id: str, record: CanonicalNutritionRecord
    ) -> StoredNutritionRecord:
        """Persist a record with its derived warnings in the canonical schema."""
        report = build_compliance_report(record, self.thresholds)
        payload = to_storage_payload(record, report.warnings)
        stored = self.repository.save_record(product_id, payload)
        _logger.info(
            "Nutrition record saved: product_id=%s warnings=%s",
            product_id,
            len(report.warnings),
        )
        return stored

    def load_latest(self, product_id: str) -> StoredNutritionRecord | None:
        """Return the latest saved record for a product."""
        return self.repository.get_latest(product_id)

    def history(self, product_id: str, limit: int = 10) -> list[StoredNutritionRecord]:
        """Return saved records for a product, newest first."""
        return self.repository.list_history(product_id, max(1, limit))
