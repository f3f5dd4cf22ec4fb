"""Routes exposing the personalized catalog listing."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from storefront.api.dependencies import (
    CatalogAssemblerDependency,
    ExistingUserDependency,
)
from storefront.models.catalog import CatalogByIdsRequest, CatalogResponse
from storefront.services.errors import StoreError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get(
    "",
    response_model=CatalogResponse,
    summary="Ranked catalog listing for a user",
)
async def get_catalog(
    user_id: ExistingUserDependency,
    assembler: CatalogAssemblerDependency,
) -> CatalogResponse:
    try:
        return await assembler.build_for_user(user_id)
    except StoreError as exc:
        logger.exception("Catalog assembly failed for user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch catalog data",
        ) from exc


@router.post(
    "/by-ids",
    response_model=CatalogResponse,
    summary="Ranked catalog listing for explicit catalog ids",
)
async def get_catalog_by_ids(
    payload: CatalogByIdsRequest,
    assembler: CatalogAssemblerDependency,
) -> CatalogResponse:
    try:
        return await assembler.build_for_catalog_ids(
            payload.catalog_ids,
            payload.user_id,
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        logger.exception("Catalog assembly failed for direct request")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch catalog data",
        ) from exc


@router.get("/health")
async def catalog_health() -> dict[str, str]:
    return {
        "service": "catalog",
        "status": "healthy",
        "message": "Catalog service is running",
    }
