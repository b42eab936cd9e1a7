"""Compliance report assembly."""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from nutrition_labels.domain.nutrition import CanonicalNutritionRecord
from nutrition_labels.domain.warnings import NutritionWarning, ThresholdSettings
from nutrition_labels.services.allergens import (
    allergen_categories,
    extract_allergens,
    generate_allergen_statement,
)
from nutrition_labels.services.cautions import process_cautions
from nutrition_labels.services.normalizer import per_serving_amount
from nutrition_labels.services.scoring import grade_inputs, health_grade, health_score
from nutrition_labels.services.thresholds import (
    generate_threshold_warnings,
    health_label_notes,
    merge_warnings,
    per_serving_metrics,
)

_MAX_HIGHLIGHTS = 5
_WORD_START = re.compile(r"\b\w")


@dataclass(frozen=True)
class ComplianceReport:
    """Everything the compliance view shows for one record."""

    warnings: tuple[NutritionWarning, ...]
    health_score: int
    grade: str
    allergens: tuple[str, ...]
    allergen_statement: str
    allergen_categories: tuple[str, ...] = ()
    highlights: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation."""
        return {
            "warnings": [warning.to_dict() for warning in self.warnings],
            "health_score": self.health_score,
            "grade": self.grade,
            "allergens": list(self.allergens),
            "allergen_statement": self.allergen_statement,
            "allergen_categories": list(self.allergen_categories),
            "highlights": list(self.highlights),
        }


def build_compliance_report(
    record: CanonicalNutritionRecord,
    thresholds: ThresholdSettings | None = None,
    structured_allergens: Mapping[str, object] | None = None,
    language: str = "en",
) -> ComplianceReport:
    """Derive every compliance output from a record."""
    settings = thresholds or ThresholdSettings()
    warnings = merge_warnings(
        process_cautions(record.cautions),
        health_label_notes(record.health_labels),
        generate_threshold_warnings(
            per_serving_metrics(record),
            settings,
            recipe_fiber_g=record.macros.fiber_g,
            servings=record.servings,
        ),
    )
    allergens = extract_allergens(sorted(record.health_labels), structured_allergens)
    if not allergens and structured_allergens is None:
        allergens = sorted(record.allergens, key=str.lower)
    score = health_score(warnings)
    return ComplianceReport(
        warnings=tuple(warnings),
        health_score=score,
        grade=health_grade(grade_inputs(record)),
        allergens=tuple(allergens),
        allergen_statement=generate_allergen_statement(allergens, language),
        allergen_categories=tuple(allergen_categories(allergens)),
        highlights=tuple(nutritional_highlights(record, score)),
    )


def nutritional_highlights(record: CanonicalNutritionRecord, score: int) -> list[str]:
    """Return up to five positive callouts for a record.

    Health labels come first, reformatted as words (``LOW_SODIUM`` becomes
    ``LOW SODIUM``, ``gluten_free`` becomes ``Gluten Free``). Per-serving
    nutrient callouts fill any remaining space.
    """
    highlights = _label_highlights(sorted(record.health_labels))
    candidates = (
        (per_serving_amount(record, "PROCNT") > 15, "High Protein"),
        (per_serving_amount(record, "FIBTG") > 5, "Good Fiber Source"),
        (per_serving_amount(record, "VITC") > 50, "Rich in Vitamin C"),
        (0 < per_serving_amount(record, "ENERC_KCAL") < 100, "Low Calorie"),
        (score > 85, "Excellent Nutritional Profile"),
    )
    for applies, highlight in candidates:
        if applies and highlight not in highlights:
            highlights.append(highlight)
    return highlights[:_MAX_HIGHLIGHTS]


def _label_highlights(labels: Iterable[str]) -> list[str]:
    highlights: list[str] = []
    for label in labels:
        cleaned = _WORD_START.sub(
            lambda match: match.group().upper(), label.replace("_", " ").strip()
        )
        if cleaned and cleaned not in highlights:
            highlights.append(cleaned)
    return highlights
