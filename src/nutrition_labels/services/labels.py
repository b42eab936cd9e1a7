"""Label rendering service with result caching."""

import hashlib
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from nutrition_labels.domain.labels import (
    BusinessInfo,
    LabelCustomization,
    RenderedLabel,
)
from nutrition_labels.domain.nutrition import (
    CanonicalNutritionRecord,
    NutritionAdjustments,
)
from nutrition_labels.services.cache import Cache
from nutrition_labels.services.normalizer import apply_adjustments, to_storage_payload
from nutrition_labels.services.rendering import render_label

_logger = logging.getLogger(__name__)


@dataclass
class LabelService:
    """Renders labels and caches them by input fingerprint."""

    cache: Cache
    default_vitamins: tuple[str, ...] = ()
    ttl_seconds: int = 600
    debug: bool = False

    def render(
        self,
        record: CanonicalNutritionRecord,
        customization: LabelCustomization | None = None,
        *,
        ingredients: Iterable[str] = (),
        business_info: BusinessInfo | None = None,
        product_name: str | None = None,
        allergens: Iterable[str] | None = None,
    ) -> RenderedLabel:
        """Render a label, reusing a cached result for identical inputs."""
        options = customization or LabelCustomization(vitamins=self.default_vitamins)
        ingredient_list = list(ingredients)
        allergen_list = None if allergens is None else sorted(allergens)
        cache_key = _fingerprint(
            record,
            options,
            ingredient_list,
            business_info,
            product_name,
            allergen_list,
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, RenderedLabel):
            return cached.model_copy(deep=True)

        label = render_label(
            record,
            options,
            ingredients=ingredient_list,
            business_info=business_info,
            product_name=product_name,
            allergens=allergen_list,
        )
        self.cache.set(cache_key, label, ttl_seconds=self.ttl_seconds)
        if self.debug:
            _logger.info(
                "Label rendered: layout=%s language=%s",
                options.layout_type.value,
                options.language.value,
            )
        return label.model_copy(deep=True)

    def preview(
        self,
        record: CanonicalNutritionRecord,
        adjustments: NutritionAdjustments,
        customization: LabelCustomization | None = None,
        **kwargs: object,
    ) -> RenderedLabel:
        """Render a label for a derived record with manual adjustments applied."""
        return self.render(
            apply_adjustments(record, adjustments), customization, **kwargs
        )


def _fingerprint(
    record: CanonicalNutritionRecord,
    options: LabelCustomization,
    ingredients: list[str],
    business_info: BusinessInfo | None,
    product_name: str | None,
    allergens: list[str] | None,
) -> str:
    document = {
        "record": to_storage_payload(record),
        "options": options.model_dump(mode="json"),
        "ingredients": ingredients,
        "business_info": business_info.model_dump() if business_info else None,
        "product_name": product_name,
        "allergens": allergens,
    }
    encoded = json.dumps(document, sort_keys=True, ensure_ascii=False).encode()
    return f"label:{hashlib.sha256(encoded).hexdigest()}"
