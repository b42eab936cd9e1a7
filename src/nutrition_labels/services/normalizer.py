"""Normalization between raw nutrition payloads and canonical records."""

import dataclasses
import logging
import math
from collections.abc import Iterable, Mapping

from nutrition_labels.domain import catalog
from nutrition_labels.domain.nutrition import (
    CanonicalNutritionRecord,
    MacroProfile,
    NutrientUnit,
    NutrientValue,
    NutritionAdjustments,
)
from nutrition_labels.domain.warnings import NutritionWarning
from nutrition_labels.services.allergens import unique_allergens

_UNIT_ALIASES = {
    "g": NutrientUnit.G,
    "gram": NutrientUnit.G,
    "grams": NutrientUnit.G,
    "mg": NutrientUnit.MG,
    "mcg": NutrientUnit.MCG,
    "µg": NutrientUnit.MCG,
    "μg": NutrientUnit.MCG,
    "ug": NutrientUnit.MCG,
    "kcal": NutrientUnit.KCAL,
    "cal": NutrientUnit.KCAL,
}

# Grams per unit.
_MASS_FACTORS = {
    NutrientUnit.G: 1.0,
    NutrientUnit.MG: 1e-3,
    NutrientUnit.MCG: 1e-6,
}

# Codes whose recipe amount falls back to the macro profile.
_MACRO_FALLBACKS = {
    "PROCNT": "protein_g",
    "CHOCDF": "carbs_g",
    "FAT": "fat_g",
    "FIBTG": "fiber_g",
}

# Snake_case keys only the storage schema uses.
_STORED_KEYS = (
    "basic_nutrition",
    "macronutrients",
    "micronutrients",
    "daily_values",
    "health_labels",
    "diet_labels",
    "warnings",
)

_logger = logging.getLogger(__name__)


def normalize(payload: object) -> CanonicalNutritionRecord:
    """Build a canonical record from an analysis or storage payload.

    The schema is detected from the payload keys. Envelopes such as
    ``{"data": {...}}`` and product rows carrying a ``nutritional_data`` list
    are unwrapped first. Missing or malformed data degrades to zeros.
    """
    body = _unwrap(payload)
    if any(key in body for key in _STORED_KEYS):
        return normalize_stored_payload(body)
    return normalize_analysis_payload(body)


def normalize_analysis_payload(payload: object) -> CanonicalNutritionRecord:
    """Build a record from a nutrition-analysis API response body."""
    body = _as_mapping(payload)
    total_nutrients = _as_mapping(body.get("totalNutrients"))
    total_daily = _as_mapping(body.get("totalDaily"))
    summary = _as_mapping(body.get("nutritionSummary"))
    summary_macros = _as_mapping(summary.get("macronutrients"))

    extended = _extended_nutrients(total_nutrients, total_daily)
    servings = _as_servings(body.get("servings", body.get("yield")))

    calories = _first_present(
        body.get("calories"),
        summary.get("calories"),
        _as_mapping(total_nutrients.get("ENERC_KCAL")).get("quantity"),
    )
    weight_per_serving = body.get("weightPerServing")
    if weight_per_serving is None:
        weight_per_serving = _as_float(body.get("totalWeight")) / servings

    macros = MacroProfile(
        protein_g=_macro_grams(summary_macros, "protein", extended, "PROCNT"),
        carbs_g=_macro_grams(summary_macros, "carbs", extended, "CHOCDF"),
        fat_g=_macro_grams(summary_macros, "fat", extended, "FAT"),
        fiber_g=_as_float(
            _first_present(summary.get("fiber"), _quantity_of(extended, "FIBTG"))
        ),
    )
    return CanonicalNutritionRecord(
        calories_total=_as_float(calories),
        servings=servings,
        weight_per_serving_g=_as_float(weight_per_serving),
        macros=macros,
        extended_nutrients=extended,
        health_labels=frozenset(_as_str_list(body.get("healthLabels"))),
        diet_labels=frozenset(_as_str_list(body.get("dietLabels"))),
        cautions=tuple(_as_str_list(body.get("cautions"))),
        allergens=frozenset(unique_allergens(_as_str_list(body.get("allergens")))),
    )


def normalize_stored_payload(payload: object) -> CanonicalNutritionRecord:
    """Build a record from the category-grouped storage schema."""
    body = _as_mapping(payload)
    basic = _as_mapping(body.get("basic_nutrition"))
    macros = _as_mapping(body.get("macronutrients"))
    extended = _extended_nutrients(
        _as_mapping(body.get("micronutrients")),
        _as_mapping(body.get("daily_values")),
    )
    return CanonicalNutritionRecord(
        calories_total=_as_float(basic.get("total_calories")),
        servings=_as_servings(basic.get("servings")),
        weight_per_serving_g=_as_float(basic.get("weight_per_serving")),
        macros=MacroProfile(
            protein_g=_as_float(macros.get("protein")),
            carbs_g=_as_float(macros.get("carbohydrates")),
            fat_g=_as_float(macros.get("fat")),
            fiber_g=_as_float(macros.get("fiber")),
        ),
        extended_nutrients=extended,
        health_labels=frozenset(_as_str_list(body.get("health_labels"))),
        diet_labels=frozenset(_as_str_list(body.get("diet_labels"))),
        cautions=tuple(_as_str_list(body.get("cautions"))),
        allergens=frozenset(unique_allergens(_as_str_list(body.get("allergens")))),
    )


def to_storage_payload(
    record: CanonicalNutritionRecord,
    warnings: Iterable[NutritionWarning] = (),
) -> dict[str, object]:
    """Serialize a record into the canonical category-grouped save schema."""
    micronutrients: dict[str, dict[str, object]] = {}
    daily_values: dict[str, dict[str, object]] = {}
    for code, nutrient in record.extended_nutrients.items():
        micronutrients[code] = {
            "label": nutrient.label,
            "quantity": nutrient.quantity,
            "unit": nutrient.unit.value,
            "percentage": nutrient.daily_value_percent,
        }
        if nutrient.daily_value_percent is not None:
            daily_values[code] = {
                "label": nutrient.label,
                "quantity": nutrient.daily_value_percent,
                "unit": "%",
            }
    return {
        "basic_nutrition": {
            "total_calories": record.calories_total,
            "servings": record.servings,
            "weight_per_serving": record.weight_per_serving_g,
        },
        "macronutrients": {
            "protein": record.macros.protein_g,
            "carbohydrates": record.macros.carbs_g,
            "fat": record.macros.fat_g,
            "fiber": record.macros.fiber_g,
        },
        "micronutrients": micronutrients,
        "daily_values": daily_values,
        "health_labels": sorted(record.health_labels),
        "diet_labels": sorted(record.diet_labels),
        "allergens": sorted(record.allergens, key=str.lower),
        "cautions": list(record.cautions),
        "warnings": [warning.to_dict() for warning in warnings],
    }


def apply_adjustments(
    record: CanonicalNutritionRecord, adjustments: NutritionAdjustments
) -> CanonicalNutritionRecord:
    """Return a derived record with per-serving deltas applied.

    Deltas are multiplied by the serving count and results are clamped at
    zero. Adjusted nutrients lose their supplied percent so the daily value
    is recomputed from the new amount.
    """
    if adjustments.is_empty():
        return record
    servings = record.servings
    extended = dict(record.extended_nutrients)
    calories_total = record.calories_total
    macros = record.macros

    if adjustments.calories:
        calories_total = max(0.0, calories_total + adjustments.calories * servings)
        _shift_nutrient(
            extended, "ENERC_KCAL", adjustments.calories * servings, NutrientUnit.KCAL
        )
    if adjustments.fat_g:
        macros = dataclasses.replace(
            macros, fat_g=max(0.0, macros.fat_g + adjustments.fat_g * servings)
        )
        _shift_nutrient(extended, "FAT", adjustments.fat_g * servings, NutrientUnit.G)
    if adjustments.sodium_mg:
        _shift_nutrient(
            extended, "NA", adjustments.sodium_mg * servings, NutrientUnit.MG
        )
    if adjustments.sugar_g:
        _shift_nutrient(
            extended, "SUGAR", adjustments.sugar_g * servings, NutrientUnit.G
        )
    _logger.debug("Applied nutrition adjustments: %s", adjustments)
    return dataclasses.replace(
        record,
        calories_total=calories_total,
        macros=macros,
        extended_nutrients=extended,
    )


def convert_amount(
    quantity: float, from_unit: NutrientUnit, to_unit: NutrientUnit
) -> float:
    """Convert between mass units; other combinations pass through."""
    if from_unit == to_unit:
        return quantity
    if from_unit not in _MASS_FACTORS or to_unit not in _MASS_FACTORS:
        return quantity
    return quantity * _MASS_FACTORS[from_unit] / _MASS_FACTORS[to_unit]


def recipe_amount(record: CanonicalNutritionRecord, code: str) -> float:
    """Return the recipe total for a code in its catalog unit.

    Macronutrient codes fall back to the macro profile when the payload
    carried no extended entry for them.
    """
    nutrient = record.nutrient(code)
    info = catalog.lookup(code)
    if nutrient is not None:
        if info is None:
            return nutrient.quantity
        return convert_amount(nutrient.quantity, nutrient.unit, info.unit)
    if code == "ENERC_KCAL":
        return record.calories_total
    field_name = _MACRO_FALLBACKS.get(code)
    if field_name:
        return getattr(record.macros, field_name)
    return 0.0


def per_serving_amount(record: CanonicalNutritionRecord, code: str) -> float:
    """Return the per-serving amount for a code in its catalog unit."""
    return recipe_amount(record, code) / record.servings


def parse_unit(raw: object, code: str | None = None) -> NutrientUnit:
    """Resolve a unit string, falling back to the catalog unit or grams."""
    if isinstance(raw, NutrientUnit):
        return raw
    if isinstance(raw, str):
        unit = _UNIT_ALIASES.get(raw.strip().lower())
        if unit is not None:
            return unit
    info = catalog.lookup(code) if code else None
    if info is not None:
        return info.unit
    return NutrientUnit.G


def _unwrap(payload: object) -> Mapping[str, object]:
    body = _as_mapping(payload)
    data = body.get("data")
    if isinstance(data, Mapping):
        body = data
    nested = body.get("nutritional_data")
    if isinstance(nested, list):
        body = _as_mapping(nested[0]) if nested else {}
    elif isinstance(nested, Mapping):
        body = nested
    return body


def _extended_nutrients(
    nutrients: Mapping[str, object], daily: Mapping[str, object]
) -> dict[str, NutrientValue]:
    extended: dict[str, NutrientValue] = {}
    for code, raw in nutrients.items():
        entry = _as_mapping(raw)
        if not entry:
            continue
        code = str(code)
        percent = entry.get("percentage")
        if percent is None:
            percent = _as_mapping(daily.get(code)).get("quantity")
        info = catalog.lookup(code)
        label = entry.get("label")
        if not isinstance(label, str) or not label.strip():
            label = info.label_en if info else code
        extended[code] = NutrientValue(
            code=code,
            label=label,
            quantity=_as_float(entry.get("quantity")),
            unit=parse_unit(entry.get("unit"), code),
            daily_value_percent=_as_optional_float(percent),
        )
    return extended


def _macro_grams(
    summary_macros: Mapping[str, object],
    key: str,
    extended: Mapping[str, NutrientValue],
    code: str,
) -> float:
    grams = _as_mapping(summary_macros.get(key)).get("grams")
    return _as_float(_first_present(grams, _quantity_of(extended, code)))


def _quantity_of(extended: Mapping[str, NutrientValue], code: str) -> float | None:
    nutrient = extended.get(code)
    if nutrient is None:
        return None
    return nutrient.quantity


def _shift_nutrient(
    extended: dict[str, NutrientValue],
    code: str,
    delta: float,
    delta_unit: NutrientUnit,
) -> None:
    current = extended.get(code)
    if current is None:
        info = catalog.lookup(code)
        unit = info.unit if info else delta_unit
        label = info.label_en if info else code
        current = NutrientValue(code=code, label=label, quantity=0.0, unit=unit)
    shifted = current.quantity + convert_amount(delta, delta_unit, current.unit)
    extended[code] = dataclasses.replace(
        current, quantity=max(0.0, shifted), daily_value_percent=None
    )


def _first_present(*values: object) -> object:
    for value in values:
        if value is not None:
            return value
    return None


def _as_mapping(value: object) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        return value
    return {}


def _as_str_list(value: object) -> list[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, list | tuple | set | frozenset):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _as_optional_float(value: object) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _as_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    number = _as_optional_float(value)
    if number is None:
        return 0.0
    return number


def _as_servings(value: object) -> int:
    number = _as_float(value)
    if number < 1:
        return 1
    return int(number)
