"""Catalog listing schemas returned by the catalog API."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class CatalogItem(BaseModel):
    """Display-ready catalog entry built from one pricing/taxonomy row."""

    catalog_id: str = Field(..., description="Catalog identifier")
    product_id: str = Field(..., description="Representative product of the catalog")
    image_url: str
    category: str
    sub_category: str
    title: str
    price: str = Field(..., description="Formatted selling price, e.g. ₹499")
    original_price: str = Field(..., description="Formatted strikethrough price")
    discount: str = Field(..., description="Formatted discount amount, e.g. ₹100 OFF")
    discount_percent: int = Field(0, ge=0, le=100)


class CatalogMeta(BaseModel):
    """Provenance metadata attached to every catalog response."""

    total_products: int = Field(..., ge=0)
    user_id: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    source: str = Field(
        ...,
        description="Which data path produced the listing",
    )
    ranking_applied: bool = Field(
        False,
        description="False when the ranking service was skipped or failed",
    )


class CatalogResponse(BaseModel):
    """Envelope returned by GET /api/v1/catalog."""

    success: bool = True
    message: str = "Catalog data retrieved successfully"
    data: list[CatalogItem] = Field(default_factory=list)
    meta: CatalogMeta


class CatalogByIdsRequest(BaseModel):
    """Body for POST /api/v1/catalog/by-ids."""

    catalog_ids: list[str] = Field(..., min_length=1)
    user_id: str | None = Field(
        None,
        description="Optional user forwarded to the ranking service",
    )
