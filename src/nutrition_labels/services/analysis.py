"""Recipe analysis service integrating the nutrition analysis API."""

import asyncio
import hashlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nutrition_labels.adapters.analysis_client import AnalysisClient
from nutrition_labels.domain.nutrition import CanonicalNutritionRecord
from nutrition_labels.services.cache import Cache
from nutrition_labels.services.ingredients import parse_ingredients
from nutrition_labels.services.normalizer import normalize

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass(frozen=True)
class AnalysisResult:
    """Normalized analysis outcome with the lines that were analyzed."""

    title: str
    ingredients: tuple[str, ...]
    record: CanonicalNutritionRecord
    raw_payload: dict[str, object]


@dataclass
class AnalysisService:
    """Parses ingredient text, calls the analysis API and normalizes the result."""

    client: AnalysisClient
    cache: Cache
    ttl_seconds: int = 3600
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def analyze(self, title: str, ingredient_text: str) -> AnalysisResult:
        """Analyze free-text ingredients; raises ``ParseError`` on empty input."""
        ingredients = parse_ingredients(ingredient_text)
        cache_key = _cache_key(title, ingredients)
        cached = self.cache.get(cache_key)
        if isinstance(cached, AnalysisResult):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.analyze_recipe(title, ingredients),
            action="analyze",
        )
        result = AnalysisResult(
            title=title,
            ingredients=tuple(ingredients),
            record=normalize(payload),
            raw_payload=payload,
        )
        self.cache.set(cache_key, result, ttl_seconds=self.ttl_seconds)
        if self.debug:
            _logger.info(
                "Recipe analyzed: title=%s ingredients=%s", title, len(ingredients)
            )
        return result

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                if self.debug:
                    _logger.warning(
                        "Analysis %s failed (attempt %s/%s, status=%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        status_code,
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _cache_key(title: str, ingredients: list[str]) -> str:
    digest = hashlib.sha256("\n".join(ingredients).lower().encode()).hexdigest()
    return f"analysis:{title.strip().lower()}:{digest[:16]}"


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
