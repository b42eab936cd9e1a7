"""Canonical nutrition domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class NutrientUnit(str, Enum):
    """Units a canonical nutrient quantity can be expressed in."""

    G = "g"
    MG = "mg"
    MCG = "mcg"
    KCAL = "kcal"


@dataclass(frozen=True)
class NutrientValue:
    """Single nutrient entry carried through from an analysis payload."""

    code: str
    label: str
    quantity: float
    unit: NutrientUnit
    daily_value_percent: float | None = None


@dataclass(frozen=True)
class MacroProfile:
    """Recipe-level macronutrient grams."""

    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0


@dataclass(frozen=True)
class CanonicalNutritionRecord:
    """Normalized, immutable snapshot of a recipe's nutrition profile.

    Quantities are recipe totals; per-serving values are derived by dividing
    by ``servings``, which is always at least one.
    """

    calories_total: float = 0.0
    servings: int = 1
    weight_per_serving_g: float = 0.0
    macros: MacroProfile = field(default_factory=MacroProfile)
    extended_nutrients: Mapping[str, NutrientValue] = field(default_factory=dict)
    health_labels: frozenset[str] = frozenset()
    diet_labels: frozenset[str] = frozenset()
    cautions: tuple[str, ...] = ()
    allergens: frozenset[str] = frozenset()

    def nutrient(self, code: str) -> NutrientValue | None:
        """Return the extended nutrient for a code, if present."""
        return self.extended_nutrients.get(code)

    def quantity(self, code: str) -> float:
        """Return the recipe-level quantity for a code, or zero."""
        nutrient = self.extended_nutrients.get(code)
        if nutrient is None:
            return 0.0
        return nutrient.quantity


@dataclass(frozen=True)
class NutritionAdjustments:
    """Manual per-serving deltas applied for label preview."""

    calories: float = 0.0
    fat_g: float = 0.0
    sodium_mg: float = 0.0
    sugar_g: float = 0.0

    def is_empty(self) -> bool:
        """Return True when no delta is set."""
        return not any((self.calories, self.fat_g, self.sodium_mg, self.sugar_g))
