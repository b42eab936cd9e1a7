"""Ingredient caution classification."""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from nutrition_labels.domain.warnings import NutritionWarning, Severity, WarningType


@dataclass(frozen=True)
class CautionCategory:
    """Known caution code with its risk tier."""

    severity: Severity
    description: str
    guidance: str


_HIGH = Severity.HIGH
_MEDIUM = Severity.MEDIUM
_LOW = Severity.LOW

CAUTION_CATEGORIES: dict[str, CautionCategory] = {
    "SULFITES": CautionCategory(
        _HIGH,
        "sulfite preservatives",
        "Must be declared; may trigger asthma reactions in sensitive individuals.",
    ),
    "GLUTEN": CautionCategory(
        _HIGH, "gluten", "Not suitable for people with celiac disease."
    ),
    "WHEAT": CautionCategory(
        _HIGH, "wheat", "Declare as a major food allergen."
    ),
    "PEANUTS": CautionCategory(
        _HIGH, "peanuts", "Declare as a major food allergen; risk of severe reactions."
    ),
    "TREE_NUTS": CautionCategory(
        _HIGH,
        "tree nuts",
        "Declare as a major food allergen; risk of severe reactions.",
    ),
    "SHELLFISH": CautionCategory(
        _HIGH, "crustacean shellfish", "Declare as a major food allergen."
    ),
    "FISH": CautionCategory(_HIGH, "fish", "Declare as a major food allergen."),
    "EGGS": CautionCategory(_HIGH, "eggs", "Declare as a major food allergen."),
    "MILK": CautionCategory(_HIGH, "milk", "Declare as a major food allergen."),
    "SOY": CautionCategory(_HIGH, "soy", "Declare as a major food allergen."),
    "SESAME": CautionCategory(_HIGH, "sesame", "Declare as a major food allergen."),
    "NITRITES": CautionCategory(
        _HIGH, "nitrite curing agents", "Limit intake; review permitted levels."
    ),
    "FODMAP": CautionCategory(
        _MEDIUM,
        "fermentable carbohydrates",
        "May cause digestive discomfort for people following a low-FODMAP diet.",
    ),
    "MSG": CautionCategory(
        _MEDIUM,
        "monosodium glutamate",
        "Declare by name; some consumers report sensitivity.",
    ),
    "ARTIFICIAL_COLORS": CautionCategory(
        _MEDIUM,
        "artificial colors",
        "Declare each certified color; may affect sensitive children.",
    ),
    "ARTIFICIAL_SWEETENERS": CautionCategory(
        _MEDIUM,
        "artificial sweeteners",
        "Phenylalanine sources require a phenylketonurics statement.",
    ),
    "CAFFEINE": CautionCategory(
        _MEDIUM,
        "caffeine",
        "Not recommended for children or pregnant women in large amounts.",
    ),
    "BENZOATES": CautionCategory(
        _MEDIUM, "benzoate preservatives", "Declare by name; review usage limits."
    ),
    "MUSTARD": CautionCategory(
        _MEDIUM, "mustard", "Recognized allergen in several export markets."
    ),
    "CELERY": CautionCategory(
        _MEDIUM, "celery", "Recognized allergen in several export markets."
    ),
    "LUPINE": CautionCategory(
        _MEDIUM, "lupin", "Recognized allergen in several export markets."
    ),
    "CITRIC_ACID": CautionCategory(
        _LOW, "citric acid", "Generally recognized as safe; declare by name."
    ),
    "ASCORBIC_ACID": CautionCategory(
        _LOW, "ascorbic acid", "Generally recognized as safe; declare by name."
    ),
    "LECITHIN": CautionCategory(
        _LOW, "lecithin emulsifier", "Declare the source if derived from soy or egg."
    ),
    "PECTIN": CautionCategory(
        _LOW, "pectin", "Generally recognized as safe; declare by name."
    ),
    "XANTHAN_GUM": CautionCategory(
        _LOW, "xanthan gum", "Generally recognized as safe; declare by name."
    ),
    "GUAR_GUM": CautionCategory(
        _LOW, "guar gum", "Generally recognized as safe; declare by name."
    ),
    "NATURAL_FLAVORS": CautionCategory(
        _LOW, "natural flavors", "May be declared collectively as natural flavor."
    ),
}

_UNKNOWN_DESCRIPTION = "unclassified ingredient caution"
_UNKNOWN_GUIDANCE = "Review with dietary requirements."
_SEPARATORS = re.compile(r"[\s\-]+")


def normalize_caution_code(code: str) -> str:
    """Return the lookup form of a code, e.g. ``tree nuts`` -> ``TREE_NUTS``."""
    return _SEPARATORS.sub("_", code.strip()).upper()


def classify_caution(code: str) -> CautionCategory:
    """Return the category for a code, defaulting unknown codes to medium."""
    category = CAUTION_CATEGORIES.get(normalize_caution_code(code))
    if category is None:
        return CautionCategory(_MEDIUM, _UNKNOWN_DESCRIPTION, _UNKNOWN_GUIDANCE)
    return category


def process_cautions(codes: Iterable[str] | None) -> list[NutritionWarning]:
    """Turn caution codes into severity-tagged warnings, preserving order."""
    warnings: list[NutritionWarning] = []
    for raw in codes or ():
        if not isinstance(raw, str) or not raw.strip():
            continue
        code = normalize_caution_code(raw)
        category = classify_caution(code)
        warnings.append(
            NutritionWarning(
                type=WarningType.WARNING,
                message=f"Contains {code}: {category.description}. {category.guidance}",
                severity=category.severity,
            )
        )
    return warnings
