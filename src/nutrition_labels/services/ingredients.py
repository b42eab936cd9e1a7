"""Free-text ingredient parsing."""

import logging
import re
from collections.abc import Iterable

_PLACEHOLDER_PREFIXES = ("e.g.", "eg:", "example:", "#", "//")
_QUANTITY_IN_PARENS = re.compile(r"^(?P<name>.+?)\s*\((?P<qty>[^()]+)\)$")

_logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when ingredient text contains no usable lines."""


def parse_ingredients(text: str | None) -> list[str]:
    """Split ingredient text into ordered analysis lines.

    Accepts one ingredient per line. A single comma-separated line is treated
    as the legacy format, where ``flour (2 cups)`` becomes ``flour 2 cups``.
    """
    lines = [
        line.strip()
        for line in (text or "").splitlines()
        if line.strip() and not _is_placeholder(line.strip())
    ]
    if len(lines) == 1 and "," in lines[0]:
        lines = [
            _unwrap_quantity(segment.strip())
            for segment in lines[0].split(",")
            if segment.strip()
        ]
        _logger.debug("Parsed legacy comma-separated ingredients: %s", len(lines))
    if not lines:
        raise ParseError("No valid ingredient lines found")
    return lines


def build_ingredient_string(quantity: float, unit: str, name: str) -> str:
    """Format a structured ingredient as an analysis line."""
    parts = [f"{quantity:g}" if quantity else "", unit.strip(), name.strip()]
    return " ".join(part for part in parts if part)


def collect_ingredients(
    text: str | None, structured: Iterable[tuple[float, str, str]] = ()
) -> list[str]:
    """Parse free text, then append structured ``(quantity, unit, name)`` items.

    Raises ``ParseError`` only when neither source yields a line.
    """
    extra = [build_ingredient_string(*item) for item in structured]
    extra = [line for line in extra if line]
    try:
        lines = parse_ingredients(text)
    except ParseError:
        if not extra:
            raise
        lines = []
    return lines + extra


def _is_placeholder(line: str) -> bool:
    return line.lower().startswith(_PLACEHOLDER_PREFIXES)


def _unwrap_quantity(segment: str) -> str:
    match = _QUANTITY_IN_PARENS.match(segment)
    if not match:
        return segment
    return f"{match.group('name').strip()} {match.group('qty').strip()}"
