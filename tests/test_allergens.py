"""Tests for allergen extraction and statements."""

from nutrition_labels.services.allergens import (
    allergen_categories,
    extract_allergens,
    generate_allergen_statement,
    map_allergen_to_category,
    sorted_allergens,
    unique_allergens,
)


def test_extract_allergens_from_health_labels() -> None:
    labels = ["Contains Milk", "EGG_WHITES", "Peanut butter", "Wheat"]

    assert extract_allergens(labels) == ["gluten", "wheat", "dairy", "eggs", "nuts"]


def test_extract_allergens_matches_keywords_inside_tokens() -> None:
    assert extract_allergens(["PEANUTBUTTER"]) == ["nuts"]
    assert extract_allergens(["WHOLEWHEAT_BREAD"]) == ["gluten", "wheat"]
    assert extract_allergens(["SOYMILK"]) == ["dairy", "soy"]
    assert extract_allergens(["PEANUTBUTTER_FREE"]) == []


def test_extract_allergens_skips_absence_labels() -> None:
    labels = ["PEANUT_FREE", "Dairy-Free", "No Soy", "GLUTEN_FREE", "VEGAN"]

    assert extract_allergens(labels) == []


def test_extract_allergens_prefers_structured_data() -> None:
    structured = {
        "detected": {"dairy": [{"name": "Milk"}], "nuts": ["Almonds"]},
        "manual": [{"name": "milk"}, "Sesame", {"name": "  "}],
    }

    result = extract_allergens(["Wheat"], structured)

    assert result == ["Milk", "Almonds", "Sesame"]


def test_extract_allergens_empty_structured_data_wins() -> None:
    assert extract_allergens(["Wheat"], {}) == []


def test_map_allergen_to_category() -> None:
    assert map_allergen_to_category("Milk") == "dairy"
    assert map_allergen_to_category("roasted almonds") == "tree_nuts"
    assert map_allergen_to_category("حليب") == "dairy"
    assert map_allergen_to_category("سمسم") == "sesame"
    assert map_allergen_to_category("quinoa") == "other"
    assert map_allergen_to_category("") == "other"


def test_generate_allergen_statement_english() -> None:
    assert generate_allergen_statement([]) == ""
    assert generate_allergen_statement(["Milk"]) == "Contains: Milk."
    assert generate_allergen_statement(["Soy", "Milk"]) == "Contains: Milk and Soy."
    assert (
        generate_allergen_statement(["Soy", "milk", "Eggs", "Milk"])
        == "Contains: Eggs, milk, and Soy."
    )


def test_generate_allergen_statement_arabic() -> None:
    assert generate_allergen_statement(["حليب"], "ar") == "يحتوي على: حليب."
    assert (
        generate_allergen_statement(["حليب", "بيض", "سمسم"], "ar")
        == "يحتوي على: بيض، حليب و سمسم."
    )


def test_unique_allergens_keeps_first_spelling() -> None:
    names = ["Milk", " milk ", "MILK", "", "Eggs", 3]

    assert unique_allergens(names) == ["Milk", "Eggs"]
    assert sorted_allergens(["soy", "Milk", "milk"]) == ["Milk", "soy"]


def test_allergen_categories_in_first_seen_order() -> None:
    names = ["Milk", "Cheese", "Almonds", "بيض", "quinoa"]

    assert allergen_categories(names) == ["dairy", "tree_nuts", "eggs", "other"]
