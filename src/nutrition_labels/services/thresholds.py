"""Per-serving threshold warnings."""

from collections.abc import Iterable

from nutrition_labels.domain.nutrition import CanonicalNutritionRecord
from nutrition_labels.domain.warnings import (
    NutritionWarning,
    PerServingMetrics,
    Severity,
    ThresholdSettings,
    WarningType,
)
from nutrition_labels.services.daily_values import round_half_up
from nutrition_labels.services.normalizer import per_serving_amount

_SODIUM_WARN, _SODIUM_HIGH = 0.3, 0.5
_CALORIES_WARN, _CALORIES_HIGH = 0.4, 0.6
_FAT_WARN, _FAT_HIGH = 0.4, 0.6
_FIBER_NOTE_G = 5.0
_FIBER_PER_SERVING_G = 3.0


def per_serving_metrics(record: CanonicalNutritionRecord) -> PerServingMetrics:
    """Derive rounded per-serving sodium (mg), calories and fat (g)."""
    return PerServingMetrics(
        sodium_mg=round_half_up(per_serving_amount(record, "NA")),
        calories=round_half_up(record.calories_total / record.servings),
        fat_g=round_half_up(record.macros.fat_g / record.servings),
    )


def generate_threshold_warnings(
    metrics: PerServingMetrics,
    settings: ThresholdSettings,
    recipe_fiber_g: float = 0.0,
    servings: int = 1,
) -> list[NutritionWarning]:
    """Flag per-serving values above fixed fractions of the daily limits."""
    if not settings.enabled:
        return []
    warnings: list[NutritionWarning] = []
    sodium_limit = settings.sodium_daily_limit
    if metrics.sodium_mg > _SODIUM_WARN * sodium_limit:
        warnings.append(
            NutritionWarning(
                type=WarningType.WARNING,
                message=(
                    f"High sodium content: {metrics.sodium_mg:g}mg per serving "
                    f"(>{round_half_up(_SODIUM_WARN * sodium_limit):g}mg recommended "
                    "per serving)"
                ),
                severity=_tier(metrics.sodium_mg > _SODIUM_HIGH * sodium_limit),
            )
        )
    calories_limit = settings.calories_daily_limit
    if metrics.calories > _CALORIES_WARN * calories_limit:
        warnings.append(
            NutritionWarning(
                type=WarningType.WARNING,
                message=(
                    f"High calorie content: {metrics.calories:g} calories per serving "
                    f"(>{round_half_up(_CALORIES_WARN * calories_limit):g} recommended "
                    "per serving)"
                ),
                severity=_tier(metrics.calories > _CALORIES_HIGH * calories_limit),
            )
        )
    fat_limit = settings.fat_daily_limit
    if metrics.fat_g > _FAT_WARN * fat_limit:
        warnings.append(
            NutritionWarning(
                type=WarningType.WARNING,
                message=(
                    f"High fat content: {metrics.fat_g:g}g per serving "
                    f"(>{round_half_up(_FAT_WARN * fat_limit):g}g recommended "
                    "per serving)"
                ),
                severity=_tier(metrics.fat_g > _FAT_HIGH * fat_limit),
            )
        )
    if recipe_fiber_g >= _FIBER_NOTE_G:
        warnings.append(_fiber_note(recipe_fiber_g, max(1, servings)))
    return warnings


def health_label_notes(health_labels: Iterable[str]) -> list[NutritionWarning]:
    """Return one low-severity info note per health label, sorted by label."""
    notes = []
    for label in sorted({label for label in health_labels if label.strip()}):
        readable = label.replace("_", " ").replace("-", " ").strip().title()
        notes.append(
            NutritionWarning(
                type=WarningType.INFO,
                message=f"Meets {readable} criteria",
                severity=Severity.LOW,
            )
        )
    return notes


def merge_warnings(
    cautions: Iterable[NutritionWarning],
    label_notes: Iterable[NutritionWarning],
    thresholds: Iterable[NutritionWarning],
) -> list[NutritionWarning]:
    """Concatenate warnings in display order: cautions, notes, thresholds."""
    return [*cautions, *label_notes, *thresholds]


def _tier(is_high: bool) -> Severity:
    return Severity.HIGH if is_high else Severity.MEDIUM


def _fiber_note(recipe_fiber_g: float, servings: int) -> NutritionWarning:
    per_serving = round_half_up(recipe_fiber_g / servings)
    if per_serving >= _FIBER_PER_SERVING_G:
        message = (
            f"Good fiber content: {per_serving:g}g per serving "
            f"({recipe_fiber_g:g}g total)"
        )
    else:
        message = f"Excellent total fiber: {recipe_fiber_g:g}g per recipe"
    return NutritionWarning(
        type=WarningType.INFO, message=message, severity=Severity.LOW
    )
