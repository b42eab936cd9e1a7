"""Health score and nutrition grade."""

from collections.abc import Iterable
from dataclasses import dataclass

from nutrition_labels.domain.nutrition import CanonicalNutritionRecord
from nutrition_labels.domain.warnings import NutritionWarning, Severity
from nutrition_labels.services.normalizer import per_serving_amount

_BASE_SCORE = 80
_HIGH_PENALTY = 20
_MEDIUM_PENALTY = 10

_GRADE_BANDS = ((3, "A"), (1, "B"), (-1, "C"), (-3, "D"))


@dataclass(frozen=True)
class GradeInputs:
    """Per-serving amounts the letter grade is derived from."""

    fiber_g: float = 0.0
    protein_g: float = 0.0
    sodium_mg: float = 0.0
    sugar_g: float = 0.0
    saturated_fat_g: float = 0.0


def grade_inputs(record: CanonicalNutritionRecord) -> GradeInputs:
    """Collect per-serving grade inputs from a record."""
    return GradeInputs(
        fiber_g=per_serving_amount(record, "FIBTG"),
        protein_g=per_serving_amount(record, "PROCNT"),
        sodium_mg=per_serving_amount(record, "NA"),
        sugar_g=per_serving_amount(record, "SUGAR"),
        saturated_fat_g=per_serving_amount(record, "FASAT"),
    )


def health_score(warnings: Iterable[NutritionWarning]) -> int:
    """Return a 0-100 score penalizing high and medium severity warnings."""
    high = medium = 0
    for warning in warnings:
        if warning.severity == Severity.HIGH:
            high += 1
        elif warning.severity == Severity.MEDIUM:
            medium += 1
    score = _BASE_SCORE - _HIGH_PENALTY * high - _MEDIUM_PENALTY * medium
    return max(0, min(100, score))


def health_grade(inputs: GradeInputs) -> str:
    """Return a letter grade from nutrient amounts, independent of the score."""
    points = 0
    if inputs.fiber_g > 5:
        points += 2
    if inputs.protein_g > 10:
        points += 2
    if inputs.sodium_mg > 500:
        points -= 1
    if inputs.sugar_g > 10:
        points -= 1
    if inputs.saturated_fat_g > 5:
        points -= 1
    for minimum, grade in _GRADE_BANDS:
        if points >= minimum:
            return grade
    return "F"
