"""Warning and threshold domain models."""

from dataclasses import dataclass
from enum import Enum


class WarningType(str, Enum):
    """Display category of a warning."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Severity(str, Enum):
    """Risk tier shared by cautions and threshold warnings."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class NutritionWarning:
    """Severity-tagged message shown alongside a label."""

    type: WarningType
    message: str
    severity: Severity

    def to_dict(self) -> dict[str, str]:
        """Return the storage representation."""
        return {
            "type": self.type.value,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class ThresholdSettings:
    """Daily limits used to flag per-serving excesses."""

    sodium_daily_limit: float = 2300.0
    calories_daily_limit: float = 2000.0
    fat_daily_limit: float = 65.0
    sugar_daily_limit: float = 50.0
    enabled: bool = True


@dataclass(frozen=True)
class PerServingMetrics:
    """Rounded per-serving values checked against daily limits."""

    sodium_mg: float
    calories: float
    fat_g: float
