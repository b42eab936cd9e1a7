"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from nutrition_labels.api.models import (
    AnalysisRequest,
    IngredientParseRequest,
    LabelRenderRequest,
    NormalizeRequest,
)
from nutrition_labels.api.records import router as records_router
from nutrition_labels.app_logging import configure_logging
from nutrition_labels.containers import AppContainer
from nutrition_labels.domain.labels import LabelCustomization
from nutrition_labels.services.compliance import build_compliance_report
from nutrition_labels.services.ingredients import ParseError, collect_ingredients
from nutrition_labels.services.normalizer import normalize, to_storage_payload


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(records_router)

    @app.exception_handler(ParseError)
    async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.exception_handler(httpx.HTTPError)
    async def upstream_error_handler(
        request: Request, exc: httpx.HTTPError
    ) -> JSONResponse:
        logger.exception("Nutrition analysis request failed")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": _format_upstream_error(container, exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/ingredients/parse")
    async def parse(body: IngredientParseRequest) -> dict[str, object]:
        """Split ingredient text and structured items into analysis lines."""
        return {"ingredients": collect_ingredients(body.text, body.structured())}

    @app.post("/analysis")
    async def analyze(body: AnalysisRequest, request: Request) -> dict[str, object]:
        """Analyze a recipe and return its canonical record and compliance."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.analysis_service.analyze(
            body.title, body.ingredients
        )
        report = build_compliance_report(
            result.record, state_container.settings.threshold_settings()
        )
        return {
            "title": result.title,
            "ingredients": list(result.ingredients),
            "record": to_storage_payload(result.record, report.warnings),
            "compliance": report.to_dict(),
        }

    @app.post("/records/normalize")
    async def normalize_record(
        body: NormalizeRequest, request: Request
    ) -> dict[str, object]:
        """Normalize a raw payload into the canonical save schema."""
        state_container: AppContainer = request.app.state.container
        record = normalize(body.payload)
        report = build_compliance_report(
            record,
            state_container.settings.threshold_settings(),
            body.allergens,
            body.language,
        )
        return {
            "record": to_storage_payload(record, report.warnings),
            "compliance": report.to_dict(),
        }

    @app.post("/labels/render")
    async def render(body: LabelRenderRequest, request: Request) -> dict[str, object]:
        """Render a label from a raw payload and a customization patch."""
        state_container: AppContainer = request.app.state.container
        customization = None
        if body.customization:
            try:
                customization = LabelCustomization().apply_patch(body.customization)
            except ValidationError as exc:
                raise HTTPException(
                    status_code=422,
                    detail=exc.errors(include_url=False),
                ) from exc
        record = normalize(body.payload)
        options = {
            "ingredients": body.ingredients,
            "business_info": body.business_info,
            "product_name": body.product_name,
            "allergens": body.allergens,
        }
        if body.adjustments is not None:
            label = state_container.label_service.preview(
                record, body.adjustments.to_domain(), customization, **options
            )
        else:
            label = state_container.label_service.render(
                record, customization, **options
            )
        return label.model_dump(mode="json")

    return app


def _format_upstream_error(container: AppContainer, exc: Exception) -> str:
    """Return an upstream error message with local debug info."""
    fallback = "Nutrition analysis is unavailable. Please try again."
    if container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
