"""Tests for health score and grade."""

from nutrition_labels.domain.warnings import NutritionWarning, Severity, WarningType
from nutrition_labels.services.normalizer import normalize
from nutrition_labels.services.scoring import (
    GradeInputs,
    grade_inputs,
    health_grade,
    health_score,
)
from tests.conftest import make_analysis_payload


def _warning(severity: Severity) -> NutritionWarning:
    return NutritionWarning(type=WarningType.WARNING, message="x", severity=severity)


def test_health_score_penalties() -> None:
    assert health_score([]) == 80
    assert health_score([_warning(Severity.HIGH), _warning(Severity.MEDIUM)]) == 50
    assert health_score([_warning(Severity.LOW)] * 3) == 80


def test_health_score_is_clamped() -> None:
    assert health_score([_warning(Severity.HIGH)] * 5) == 0


def test_health_grade_bands() -> None:
    assert health_grade(GradeInputs(fiber_g=6, protein_g=12)) == "A"
    assert health_grade(GradeInputs(fiber_g=6)) == "B"
    assert health_grade(GradeInputs()) == "C"
    assert health_grade(GradeInputs(sodium_mg=600, sugar_g=12)) == "D"
    assert (
        health_grade(GradeInputs(sodium_mg=600, sugar_g=12, saturated_fat_g=6))
        == "D"
    )


def test_grade_inputs_are_per_serving() -> None:
    record = normalize(make_analysis_payload())

    inputs = grade_inputs(record)

    assert inputs == GradeInputs(
        fiber_g=6, protein_g=12, sodium_mg=700, sugar_g=10, saturated_fat_g=3
    )
    assert health_grade(inputs) == "A"
