"""Tests for ingredient parsing."""

import pytest

from nutrition_labels.services.ingredients import (
    ParseError,
    build_ingredient_string,
    collect_ingredients,
    parse_ingredients,
)


def test_parse_ingredients_one_per_line() -> None:
    text = "2 cups flour\n\n  1 tsp salt  \n3 eggs\n"

    assert parse_ingredients(text) == ["2 cups flour", "1 tsp salt", "3 eggs"]


def test_parse_ingredients_skips_placeholder_lines() -> None:
    text = "e.g. 1 cup sugar\nExample: 2 eggs\n# pantry\n// note\n200 g rice"

    assert parse_ingredients(text) == ["200 g rice"]


def test_parse_ingredients_legacy_comma_format() -> None:
    text = "flour (2 cups), sugar (1 cup), salt"

    assert parse_ingredients(text) == ["flour 2 cups", "sugar 1 cup", "salt"]


def test_parse_ingredients_keeps_commas_in_multiline_text() -> None:
    text = "1 onion, diced\n2 cloves garlic"

    assert parse_ingredients(text) == ["1 onion, diced", "2 cloves garlic"]


@pytest.mark.parametrize("text", ["", "   \n  ", None, "e.g. 1 cup flour"])
def test_parse_ingredients_rejects_empty_input(text: str | None) -> None:
    with pytest.raises(ParseError, match="No valid ingredient lines found"):
        parse_ingredients(text)


def test_build_ingredient_string() -> None:
    assert build_ingredient_string(2.0, "cups", "flour") == "2 cups flour"
    assert build_ingredient_string(0.5, "tsp", " salt ") == "0.5 tsp salt"
    assert build_ingredient_string(0, "", "eggs") == "eggs"


def test_collect_ingredients_appends_structured_items() -> None:
    lines = collect_ingredients("pasta (2 cups), salt", [(1.5, "cup", "milk")])

    assert lines == ["pasta 2 cups", "salt", "1.5 cup milk"]


def test_collect_ingredients_structured_only() -> None:
    assert collect_ingredients("", [(2, "", "eggs")]) == ["2 eggs"]


def test_collect_ingredients_requires_some_line() -> None:
    with pytest.raises(ParseError):
        collect_ingredients("e.g. 1 egg", [(0, "", " ")])
