"""FDA daily value percentages."""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

# FDA 2016 reference daily intakes (21 CFR 101.9), in the catalog unit of
# each code: grams, milligrams or micrograms.
REFERENCE_INTAKES: dict[str, float] = {
    "FAT": 78,
    "FASAT": 20,
    "CHOLE": 300,
    "NA": 2300,
    "CHOCDF": 275,
    "FIBTG": 28,
    "SUGAR.added": 50,
    "PROCNT": 50,
    "VITD": 20,
    "CA": 1300,
    "FE": 18,
    "K": 4700,
    "VITA_RAE": 900,
    "VITC": 90,
    "TOCPHA": 15,
    "VITK1": 120,
    "THIA": 1.2,
    "RIBF": 1.3,
    "NIA": 16,
    "VITB6A": 1.7,
    "FOLDFE": 400,
    "VITB12": 2.4,
    "PANTAC": 5,
    "P": 1250,
    "MG": 420,
    "ZN": 11,
    "SE": 55,
    "CU": 0.9,
    "MN": 2.3,
}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a label printer does: halves go away from zero."""
    if not _is_finite(value):
        return 0.0
    try:
        quantum = Decimal(1).scaleb(-digits)
        rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0.0
    return float(rounded)


def calculate_dv(
    code: str, amount: float, provided_percent: float | None = None
) -> int:
    """Return the %DV for an amount already expressed in the table's unit.

    A provided percent always wins over the reference table.
    """
    if provided_percent is not None and _is_finite(provided_percent):
        return int(round_half_up(provided_percent))
    reference = REFERENCE_INTAKES.get(code)
    if not reference or not _is_finite(amount):
        return 0
    return int(round_half_up(amount / reference * 100))


def _is_finite(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)
