"""Tests for daily value calculation."""

import math

import pytest

from nutrition_labels.services.daily_values import (
    REFERENCE_INTAKES,
    calculate_dv,
    round_half_up,
)


@pytest.mark.parametrize(
    ("value", "digits", "expected"),
    [
        (2.5, 0, 3.0),
        (3.5, 0, 4.0),
        (0.45, 1, 0.5),
        (587.5, 0, 588.0),
        (-1.5, 0, -2.0),
        (math.nan, 0, 0.0),
        (math.inf, 1, 0.0),
    ],
)
def test_round_half_up(value: float, digits: int, expected: float) -> None:
    assert round_half_up(value, digits) == expected


def test_calculate_dv_uses_reference_intakes() -> None:
    assert calculate_dv("NA", 700) == 30
    assert calculate_dv("FAT", 10) == 13
    assert calculate_dv("K", 587.5) == 13
    assert calculate_dv("VITD", 2) == 10
    assert calculate_dv("SUGAR.added", 5) == 10


def test_calculate_dv_prefers_provided_percent() -> None:
    assert calculate_dv("FAT", 10, provided_percent=15.38) == 15
    assert calculate_dv("FAT", 10, provided_percent=0) == 0


def test_calculate_dv_ignores_non_finite_provided_percent() -> None:
    assert calculate_dv("FAT", 39, provided_percent=math.nan) == 50


def test_calculate_dv_unknown_code_or_bad_amount() -> None:
    assert calculate_dv("SUGAR", 12) == 0
    assert calculate_dv("UNKNOWN", 12) == 0
    assert calculate_dv("NA", math.inf) == 0


@pytest.mark.parametrize("code", [*sorted(REFERENCE_INTAKES), "UNKNOWN"])
def test_calculate_dv_zero_amount_and_provided_percent(code: str) -> None:
    assert calculate_dv(code, 0) == 0
    assert calculate_dv(code, 0, provided_percent=42) == 42
    assert calculate_dv(code, 3.5, provided_percent=42) == 42
