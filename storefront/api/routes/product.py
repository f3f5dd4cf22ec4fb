"""Routes exposing product detail pages."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from storefront.api.dependencies import (
    ExistingUserDependency,
    ProductAssemblerDependency,
)
from storefront.models.product import ProductDetailsResponse

router = APIRouter(prefix="/api/v1/product", tags=["product"])


def require_product_id(
    product_id: Annotated[str | None, Query()] = None,
) -> str:
    if not product_id or not product_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="product_id is required as query parameter",
        )
    return product_id


@router.get("/health")
async def product_health() -> dict:
    return {
        "success": True,
        "message": "Product service is healthy",
        "service": "product",
        "status": "running",
    }


@router.get(
    "/details",
    response_model=ProductDetailsResponse,
    summary="Product details with the product id as query parameter",
)
async def get_product_details(
    # resolved before the user check so a missing product id is reported first
    product_id: Annotated[str, Depends(require_product_id)],
    user_id: ExistingUserDependency,
    assembler: ProductAssemblerDependency,
) -> ProductDetailsResponse:
    return await assembler.get_product_details(product_id, user_id)


@router.get(
    "/{product_id}",
    response_model=ProductDetailsResponse,
    summary="Product details by id",
)
async def get_product_details_by_id(
    user_id: ExistingUserDependency,
    assembler: ProductAssemblerDependency,
    product_id: str = Path(..., description="Product identifier"),
) -> ProductDetailsResponse:
    return await assembler.get_product_details(product_id, user_id)
