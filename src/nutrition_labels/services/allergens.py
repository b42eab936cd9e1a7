"""Allergen extraction and allergen statements."""

import re
from collections.abc import Iterable, Mapping

from nutrition_labels.domain import catalog

# Fallback keywords in display order, each with the substrings that signal it
# inside a label token. Wheat also signals gluten.
ALLERGEN_KEYWORDS: dict[str, frozenset[str]] = {
    "gluten": frozenset({"gluten", "flour", "wheat"}),
    "wheat": frozenset({"wheat"}),
    "dairy": frozenset({"dairy", "milk", "cheese", "lactose"}),
    "eggs": frozenset({"egg"}),
    "fish": frozenset({"fish", "salmon", "tuna"}),
    "nuts": frozenset({"nut", "almond"}),
    "soy": frozenset({"soy"}),
    "shellfish": frozenset({"shellfish", "shrimp", "crab", "lobster", "crustacean"}),
}

_ABSENCE_TOKENS = frozenset({"free", "no", "without"})
_TOKEN_SPLIT = re.compile(r"[^a-z]+")

_CATEGORY_NAMES: dict[str, str] = {
    # English
    "milk": "dairy",
    "cheese": "dairy",
    "butter": "dairy",
    "cream": "dairy",
    "yogurt": "dairy",
    "lactose": "dairy",
    "dairy": "dairy",
    "eggs": "eggs",
    "egg": "eggs",
    "fish": "fish",
    "salmon": "fish",
    "tuna": "fish",
    "cod": "fish",
    "shellfish": "shellfish",
    "shrimp": "shellfish",
    "crab": "shellfish",
    "lobster": "shellfish",
    "tree nuts": "tree_nuts",
    "almonds": "tree_nuts",
    "walnuts": "tree_nuts",
    "pecans": "tree_nuts",
    "cashews": "tree_nuts",
    "pistachios": "tree_nuts",
    "hazelnuts": "tree_nuts",
    "peanuts": "peanuts",
    "peanut": "peanuts",
    "wheat": "wheat",
    "gluten": "wheat",
    "soybeans": "soybeans",
    "soy": "soybeans",
    "sesame": "sesame",
    "sulfites": "sulfites",
    "sulfur dioxide": "sulfites",
    "mustard": "mustard",
    # Arabic
    "حليب": "dairy",
    "لبن": "dairy",
    "جبن": "dairy",
    "جبنة": "dairy",
    "زبدة": "dairy",
    "كريمة": "dairy",
    "زبادي": "dairy",
    "لاكتوز": "dairy",
    "بيض": "eggs",
    "بيضة": "eggs",
    "سمك": "fish",
    "أسماك": "fish",
    "سلمون": "fish",
    "تونة": "fish",
    "سردين": "fish",
    "محار": "shellfish",
    "قشريات": "shellfish",
    "جمبري": "shellfish",
    "روبيان": "shellfish",
    "سرطان البحر": "shellfish",
    "كابوريا": "shellfish",
    "استاكوزا": "shellfish",
    "مكسرات": "tree_nuts",
    "لوز": "tree_nuts",
    "عين الجمل": "tree_nuts",
    "كاجو": "tree_nuts",
    "فستق": "tree_nuts",
    "بندق": "tree_nuts",
    "جوز": "tree_nuts",
    "فول سوداني": "peanuts",
    "فستق العبيد": "peanuts",
    "قمح": "wheat",
    "حنطة": "wheat",
    "جلوتين": "wheat",
    "غلوتين": "wheat",
    "فول الصويا": "soybeans",
    "صويا": "soybeans",
    "سمسم": "sesame",
    "طحينة": "sesame",
    "كبريتيت": "sulfites",
    "ثاني أكسيد الكبريت": "sulfites",
    "خردل": "mustard",
}


def extract_allergens(
    health_labels: Iterable[str],
    structured: Mapping[str, object] | None = None,
) -> list[str]:
    """Return allergen names from structured data or, failing that, labels.

    Any structured payload takes precedence, even an empty one. Names are
    deduplicated case-insensitively and keep their first-seen spelling.
    """
    if structured is not None:
        return _from_structured(structured)
    return _from_health_labels(health_labels)


def map_allergen_to_category(name: str) -> str:
    """Map an English or Arabic allergen name to its category, or ``other``."""
    lowered = name.strip().lower()
    if not lowered:
        return "other"
    category = _CATEGORY_NAMES.get(lowered)
    if category:
        return category
    for key, value in _CATEGORY_NAMES.items():
        if key in lowered or lowered in key:
            return value
    return "other"


def unique_allergens(names: Iterable[object]) -> list[str]:
    """Strip names and drop case-insensitive repeats, keeping first spellings."""
    unique: dict[str, str] = {}
    for name in names:
        if not isinstance(name, str) or not name.strip():
            continue
        cleaned = name.strip()
        unique.setdefault(cleaned.lower(), cleaned)
    return list(unique.values())


def sorted_allergens(names: Iterable[object]) -> list[str]:
    """Unique allergen names ordered case-insensitively."""
    return sorted(unique_allergens(names), key=str.lower)


def allergen_categories(names: Iterable[str]) -> list[str]:
    """Distinct categories of the given allergen names, in first-seen order."""
    categories: list[str] = []
    for name in unique_allergens(names):
        category = map_allergen_to_category(name)
        if category not in categories:
            categories.append(category)
    return categories


def generate_allergen_statement(names: Iterable[str], language: str = "en") -> str:
    """Build a ``Contains: a, b, and c.`` statement, or an empty string."""
    ordered = sorted_allergens(names)
    if not ordered:
        return ""
    text = catalog.UI_TEXT.get(language, catalog.UI_TEXT["en"])
    conjunction = text["and"]
    separator = "، " if language == "ar" else ", "
    if len(ordered) == 1:
        listed = ordered[0]
    elif len(ordered) == 2:
        listed = f"{ordered[0]} {conjunction} {ordered[1]}"
    elif language == "ar":
        listed = f"{separator.join(ordered[:-1])} {conjunction} {ordered[-1]}"
    else:
        listed = f"{separator.join(ordered[:-1])}, {conjunction} {ordered[-1]}"
    return f"{text['contains']}: {listed}."


def _from_structured(structured: Mapping[str, object]) -> list[str]:
    names: list[object] = []
    for group_key in ("detected", "manual"):
        for entry in _iter_entries(structured.get(group_key)):
            names.append(entry.get("name") if isinstance(entry, Mapping) else entry)
    return unique_allergens(names)


def _iter_entries(group: object) -> Iterable[object]:
    if isinstance(group, Mapping):
        for entries in group.values():
            if isinstance(entries, list | tuple):
                yield from entries
    elif isinstance(group, list | tuple):
        yield from group


def _from_health_labels(health_labels: Iterable[str]) -> list[str]:
    found: set[str] = set()
    for label in health_labels or ():
        if not isinstance(label, str):
            continue
        tokens = {token for token in _TOKEN_SPLIT.split(label.lower()) if token}
        if tokens & _ABSENCE_TOKENS:
            continue
        for keyword, signals in ALLERGEN_KEYWORDS.items():
            if any(signal in token for token in tokens for signal in signals):
                found.add(keyword)
    return [keyword for keyword in ALLERGEN_KEYWORDS if keyword in found]
