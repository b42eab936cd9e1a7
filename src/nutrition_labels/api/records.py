"""Record history endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from nutrition_labels.api.models import SaveRecordRequest
from nutrition_labels.services.normalizer import normalize, to_storage_payload

if TYPE_CHECKING:
    from nutrition_labels.containers import AppContainer
    from nutrition_labels.domain.records import StoredNutritionRecord

router = APIRouter(prefix="/records", tags=["records"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.put("/{product_id}", dependencies=[Depends(require_admin)])
async def save_record(
    product_id: str, body: SaveRecordRequest, request: Request
) -> dict[str, object]:
    """Normalize a payload and save it as the product's latest record."""
    container: AppContainer = request.app.state.container
    stored = container.record_service.save(product_id, normalize(body.payload))
    return _serialize(stored)


@router.get("/{product_id}", dependencies=[Depends(require_admin)])
async def latest_record(product_id: str, request: Request) -> dict[str, object]:
    """Return the latest saved record for a product."""
    container: AppContainer = request.app.state.container
    stored = container.record_service.load_latest(product_id)
    if stored is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _serialize(stored)


@router.get("/{product_id}/history", dependencies=[Depends(require_admin)])
async def record_history(
    product_id: str, request: Request, limit: int = 10
) -> dict[str, object]:
    """Return saved records for a product, newest first."""
    container: AppContainer = request.app.state.container
    history = container.record_service.history(product_id, limit)
    return {"records": [_serialize(stored) for stored in history]}


def _serialize(stored: StoredNutritionRecord) -> dict[str, object]:
    return {
        "id": str(stored.id),
        "product_id": stored.product_id,
        "created_at": stored.created_at.isoformat(),
        "data": to_storage_payload(stored.record, stored.warnings),
    }
