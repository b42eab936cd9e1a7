"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, Field

from nutrition_labels.domain.labels import BusinessInfo
from nutrition_labels.domain.nutrition import NutritionAdjustments


class IngredientItem(BaseModel):
    """Structured ingredient entry."""

    quantity: float = 0.0
    unit: str = ""
    name: str


class IngredientParseRequest(BaseModel):
    """Free-text ingredient list with optional structured entries."""

    text: str = ""
    items: list[IngredientItem] = Field(default_factory=list)

    def structured(self) -> list[tuple[float, str, str]]:
        """Return items as ``(quantity, unit, name)`` tuples."""
        return [(item.quantity, item.unit, item.name) for item in self.items]


class AnalysisRequest(BaseModel):
    """Recipe analysis request."""

    title: str = "Recipe"
    ingredients: str


class NormalizeRequest(BaseModel):
    """Raw analysis or storage payload with optional structured allergens."""

    payload: dict[str, object]
    allergens: dict[str, object] | None = None
    language: str = "en"


class AdjustmentsModel(BaseModel):
    """Per-serving manual adjustments."""

    calories: float = 0.0
    fat_g: float = 0.0
    sodium_mg: float = 0.0
    sugar_g: float = 0.0

    def to_domain(self) -> NutritionAdjustments:
        """Convert to the domain adjustments value."""
        return NutritionAdjustments(
            calories=self.calories,
            fat_g=self.fat_g,
            sodium_mg=self.sodium_mg,
            sugar_g=self.sugar_g,
        )


class LabelRenderRequest(BaseModel):
    """Label render request; customization accepts a partial patch."""

    payload: dict[str, object]
    customization: dict[str, object] = Field(default_factory=dict)
    ingredients: list[str] = Field(default_factory=list)
    business_info: BusinessInfo | None = None
    product_name: str | None = None
    allergens: list[str] | None = None
    adjustments: AdjustmentsModel | None = None


class SaveRecordRequest(BaseModel):
    """Raw payload to normalize and persist."""

    payload: dict[str, object]
