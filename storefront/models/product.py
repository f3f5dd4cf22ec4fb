"""Product detail domain models and API schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class ProductVariant(BaseModel):
    """Selectable variant (size) of a product."""

    id: str
    name: str
    value: str
    price: str
    stock: int = Field(..., ge=0)
    selected: bool = False


class ProductReview(BaseModel):
    """Customer review shown on the product page."""

    id: str
    user_id: str
    user_name: str
    rating: int = Field(..., ge=1, le=5)
    title: str
    comment: str
    date: datetime
    verified: bool
    helpful: int = Field(..., ge=0)


class SimilarProduct(BaseModel):
    product_id: str
    title: str
    image: str
    price: str
    rating: float
    reviews: int


class ProductDetails(BaseModel):
    """Stored product fields merged with placeholder presentation data."""

    product_id: str
    catalog_id: str
    title: str
    description: str = ""
    category: str
    sub_category: str
    price: str
    original_price: str
    discount: str
    discount_percent: int = Field(0, ge=0, le=100)
    images: list[str] = Field(default_factory=list)
    main_image: str
    rating: float = 0.0
    reviews: int = 0
    stock: int = 0
    brand: str = ""
    seller: str = ""
    delivery_info: str = ""
    return_policy: str = ""
    warranty: str = ""
    specifications: dict[str, str] = Field(default_factory=dict)
    variants: list[ProductVariant] = Field(default_factory=list)
    reviews_list: list[ProductReview] = Field(default_factory=list)
    similar_products: list[SimilarProduct] = Field(default_factory=list)


class ProductMeta(BaseModel):
    """Provenance and timing for a product detail response."""

    product_id: str
    user_id: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    source: str = Field(..., description="Stored row or placeholder data")
    cache_hit: bool = False
    response_time_ms: int = Field(0, ge=0)


class ProductDetailsResponse(BaseModel):
    """Envelope returned by the product detail endpoints."""

    success: bool = True
    message: str
    data: ProductDetails
    meta: ProductMeta
