"""Nutrition label rendering.

Rendering runs in two passes. The compute pass turns a record and a
customization into language-agnostic rows holding per-serving quantities and
%DV values. The presentation pass localizes labels, applies the case
transform, orders cells for the text direction and arranges rows into the
requested layout. Numbers are only produced by the compute pass, so every
language and layout shows the same values.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from nutrition_labels.domain import catalog
from nutrition_labels.domain.labels import (
    BusinessInfo,
    CaseTransform,
    Language,
    LabelCustomization,
    LabelRow,
    LabelSection,
    LayoutType,
    QRCodeBlock,
    RenderedLabel,
)
from nutrition_labels.domain.nutrition import CanonicalNutritionRecord, NutrientUnit
from nutrition_labels.services.allergens import (
    generate_allergen_statement,
    sorted_allergens,
)
from nutrition_labels.services.daily_values import calculate_dv, round_half_up
from nutrition_labels.services.normalizer import per_serving_amount


@dataclass(frozen=True)
class _RowSpec:
    code: str
    indent: int = 0
    emphasis: bool = False
    show_dv: bool = True
    accepts_provided_dv: bool = True
    optional: str | None = None


# FDA panel order. Optional rows are shown only when their id is selected.
_MACRO_ROWS: tuple[_RowSpec, ...] = (
    _RowSpec("FAT", emphasis=True),
    _RowSpec("FASAT", indent=1),
    _RowSpec("FATRN", indent=1, show_dv=False),
    _RowSpec("CHOLE", emphasis=True),
    _RowSpec("NA", emphasis=True),
    _RowSpec("CHOCDF", emphasis=True),
    _RowSpec("FIBTG", indent=1),
    _RowSpec("SUGAR", indent=1, show_dv=False),
    _RowSpec("SUGAR.added", indent=2, accepts_provided_dv=False),
    _RowSpec("SUGAR.alcohol", indent=1, show_dv=False, optional="sugarAlcohol"),
    _RowSpec("PROCNT", emphasis=True),
)

# Listed under Trans Fat in the caller's selection order.
_OPTIONAL_FAT_ROWS: dict[str, _RowSpec] = {
    "monounsaturatedFat": _RowSpec(
        "FAMS", indent=1, show_dv=False, optional="monounsaturatedFat"
    ),
    "polyunsaturatedFat": _RowSpec(
        "FAPU", indent=1, show_dv=False, optional="polyunsaturatedFat"
    ),
}

_PROTEIN_PERCENTAGE = "proteinPercentage"
_OPTIONAL_IDS = {optional.lower(): optional for optional in catalog.OPTIONAL_NUTRIENTS}


@dataclass(frozen=True)
class ComputedRow:
    """Language-agnostic nutrient row."""

    code: str
    quantity: float
    unit: str
    dv_percent: int | None
    indent: int
    emphasis: bool


@dataclass(frozen=True)
class ComputedLabel:
    """Output of the compute pass."""

    servings: int
    serving_size_g: int
    calories: int
    nutrient_rows: tuple[ComputedRow, ...]
    micronutrient_rows: tuple[ComputedRow, ...]


def render_label(
    record: CanonicalNutritionRecord,
    customization: LabelCustomization | None = None,
    *,
    ingredients: Iterable[str] = (),
    business_info: BusinessInfo | None = None,
    product_name: str | None = None,
    allergens: Iterable[str] | None = None,
) -> RenderedLabel:
    """Render a record into a structured, layout and language tagged label."""
    options = customization or LabelCustomization()
    computed = compute_label(record, options)
    return _present(
        computed,
        options,
        ingredients=list(ingredients),
        business_info=business_info,
        product_name=product_name,
        allergens=record.allergens if allergens is None else allergens,
    )


def compute_label(
    record: CanonicalNutritionRecord, customization: LabelCustomization
) -> ComputedLabel:
    """Compute per-serving rows for the selected nutrients."""
    optional = selected_optional_nutrients(customization.optional_nutrients)
    nutrient_rows: list[ComputedRow] = []
    for row_spec in _MACRO_ROWS:
        if row_spec.optional and row_spec.optional not in optional:
            continue
        if row_spec.code == "PROCNT":
            row_spec = _RowSpec(
                "PROCNT", emphasis=True, show_dv=_PROTEIN_PERCENTAGE in optional
            )
        nutrient_rows.append(_compute_row(record, row_spec))
        if row_spec.code == "FATRN":
            nutrient_rows.extend(
                _compute_row(record, _OPTIONAL_FAT_ROWS[name])
                for name in optional
                if name in _OPTIONAL_FAT_ROWS
            )

    micronutrient_rows = [
        _compute_row(record, _RowSpec(code))
        for code in selected_micronutrients(customization.vitamins)
    ]
    return ComputedLabel(
        servings=record.servings,
        serving_size_g=int(round_half_up(record.weight_per_serving_g)),
        calories=int(round_half_up(record.calories_total / record.servings)),
        nutrient_rows=tuple(nutrient_rows),
        micronutrient_rows=tuple(micronutrient_rows),
    )


def selected_micronutrients(selection: Iterable[str]) -> list[str]:
    """Return mandatory micronutrients followed by the caller's selection.

    Unknown ids and duplicates are dropped; the caller's order is kept.
    """
    codes = list(catalog.MANDATORY_MICRONUTRIENTS)
    for item in selection:
        code = catalog.resolve_code(item)
        if code in catalog.SELECTABLE_MICRONUTRIENTS and code not in codes:
            codes.append(code)
    return codes


def selected_optional_nutrients(selection: Iterable[str]) -> list[str]:
    """Return known optional nutrient ids in the caller's order."""
    chosen: list[str] = []
    for item in selection:
        if not isinstance(item, str):
            continue
        name = _OPTIONAL_IDS.get(item.strip().lower())
        if name and name not in chosen:
            chosen.append(name)
    return chosen


def apply_case(text: str, transform: CaseTransform) -> str:
    """Apply a case transform to label text."""
    if transform == CaseTransform.LOWER:
        return text.lower()
    if transform == CaseTransform.TITLE:
        return text.title()
    return text


def format_quantity(value: float, precision: int) -> str:
    """Format a rounded quantity without trailing zeros."""
    text = f"{round_half_up(value, precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _compute_row(record: CanonicalNutritionRecord, row_spec: _RowSpec) -> ComputedRow:
    info = catalog.NUTRIENTS[row_spec.code]
    amount = per_serving_amount(record, row_spec.code)
    dv_percent = None
    if row_spec.show_dv:
        provided = None
        nutrient = record.nutrient(row_spec.code)
        if row_spec.accepts_provided_dv and nutrient is not None:
            if nutrient.daily_value_percent is not None:
                provided = nutrient.daily_value_percent / record.servings
        dv_percent = calculate_dv(row_spec.code, amount, provided)
    return ComputedRow(
        code=row_spec.code,
        quantity=round_half_up(amount, info.precision),
        unit=info.unit.value,
        dv_percent=dv_percent,
        indent=row_spec.indent,
        emphasis=row_spec.emphasis,
    )


def _present(
    computed: ComputedLabel,
    options: LabelCustomization,
    *,
    ingredients: list[str],
    business_info: BusinessInfo | None,
    product_name: str | None,
    allergens: Iterable[str],
) -> RenderedLabel:
    language = options.language.value
    text = catalog.UI_TEXT[language]
    rtl = options.language == Language.AR
    case = options.case_transform

    nutrient_rows = [
        _present_row(row, language, case, rtl) for row in computed.nutrient_rows
    ]
    micro_rows = [
        _present_row(row, language, case, rtl) for row in computed.micronutrient_rows
    ]
    sections = _arrange(
        options.layout_type,
        nutrient_rows,
        micro_rows,
        computed,
        text,
        case,
        rtl,
    )

    allergen_names: list[str] | None = None
    statement: str | None = None
    if not options.hide_allergens:
        allergen_names = sorted_allergens(allergens)
        statement = generate_allergen_statement(allergen_names, language) or None

    shown_ingredients = None if options.hide_ingredient_list else ingredients
    shown_business = None if options.hide_business_info else business_info
    gram_text = catalog.UNIT_TEXT[language][NutrientUnit.G]
    size_separator = " " if rtl else ""

    qr_code = None
    if options.show_qr_code:
        qr_code = QRCodeBlock(
            content=_qr_content(computed, product_name),
            position="bottom-left" if rtl else "bottom-right",
        )

    return RenderedLabel(
        layout=options.layout_type,
        language=options.language,
        direction="rtl" if rtl else "ltr",
        alignment=options.alignment,
        width_px=options.width_px,
        text_color=options.text_color,
        background_color=options.background_color,
        title=apply_case(text["title"], case),
        product_name=product_name,
        servings_per_container=computed.servings,
        servings_text=apply_case(f"{computed.servings} {text['servings']}", case),
        serving_size_g=computed.serving_size_g,
        serving_size_text=apply_case(
            f"{text['serving_size']} "
            f"{computed.serving_size_g}{size_separator}{gram_text}",
            case,
        ),
        calories=computed.calories,
        sections=sections,
        footnote=text["footnote"],
        ingredients_heading=(
            apply_case(text["ingredients"], case) if shown_ingredients else None
        ),
        ingredients=shown_ingredients,
        allergens=allergen_names,
        allergen_statement=statement,
        business_heading=(
            None
            if shown_business is None
            else apply_case(text["business"], case)
        ),
        business_info=shown_business,
        qr_code=qr_code,
    )


def _present_row(
    row: ComputedRow, language: str, case: CaseTransform, rtl: bool
) -> LabelRow:
    info = catalog.NUTRIENTS[row.code]
    unit_text = catalog.UNIT_TEXT[language][info.unit]
    quantity_text = format_quantity(row.quantity, info.precision)
    if rtl:
        amount_text = f"{quantity_text} {unit_text}"
    else:
        amount_text = f"{quantity_text}{unit_text}"
    label = apply_case(info.label(language), case)
    dv_text = None if row.dv_percent is None else f"{row.dv_percent}%"
    cells = [label, amount_text, dv_text or ""]
    if rtl:
        cells.reverse()
    return LabelRow(
        code=row.code,
        label=label,
        quantity=row.quantity,
        unit=row.unit,
        amount_text=amount_text,
        dv_percent=row.dv_percent,
        dv_text=dv_text,
        indent=row.indent,
        emphasis=row.emphasis,
        cells=cells,
    )


def _arrange(
    layout: LayoutType,
    nutrient_rows: list[LabelRow],
    micro_rows: list[LabelRow],
    computed: ComputedLabel,
    text: dict[str, str],
    case: CaseTransform,
    rtl: bool,
) -> list[LabelSection]:
    if layout == LayoutType.LINEAR:
        rows = nutrient_rows + micro_rows
        separator = "، " if rtl else ", "
        parts = [f"{apply_case(text['calories'], case)} {computed.calories}"]
        for row in rows:
            part = f"{row.label} {row.amount_text}"
            if row.dv_text:
                part = f"{part} ({row.dv_text})"
            parts.append(part)
        paragraph = f"{apply_case(text['title'], case)}: {separator.join(parts)}."
        return [LabelSection(kind="paragraph", rows=rows, text=paragraph)]

    if layout == LayoutType.TABULAR:
        headers = [
            apply_case(text["nutrient"], case),
            apply_case(text["amount"], case),
            text["daily_value"],
        ]
        if rtl:
            headers.reverse()
        return [
            LabelSection(kind="table_column", headers=headers, rows=nutrient_rows),
            LabelSection(kind="table_column", headers=headers, rows=micro_rows),
        ]

    return [
        LabelSection(
            kind="nutrients",
            heading=apply_case(text["amount_per_serving"], case),
            headers=[text["daily_value"]],
            rows=nutrient_rows,
        ),
        LabelSection(kind="micronutrients", rows=micro_rows),
    ]


def _qr_content(computed: ComputedLabel, product_name: str | None) -> str:
    parts = [
        product_name or "",
        f"servings={computed.servings}",
        f"calories={computed.calories}",
    ]
    for row in (*computed.nutrient_rows, *computed.micronutrient_rows):
        parts.append(f"{row.code}={row.quantity:g}{row.unit}")
    return "|".join(parts)
