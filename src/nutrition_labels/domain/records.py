"""Persisted nutrition record models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutrition_labels.domain.nutrition import CanonicalNutritionRecord
from nutrition_labels.domain.warnings import NutritionWarning


@dataclass(frozen=True)
class StoredNutritionRecord:
    """A saved history entry for a product."""

    id: UUID
    product_id: str
    created_at: datetime
    record: CanonicalNutritionRecord
    warnings: tuple[NutritionWarning, ...] = ()
