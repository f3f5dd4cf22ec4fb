"""Turn stored pricing/taxonomy rows into display-ready values."""

from __future__ import annotations

import math
from dataclasses import dataclass

from storefront.models.catalog import CatalogItem
from storefront.models.tables import PriceProductInfo

IMAGE_PATH_TEMPLATE = "/images/products/{item_id}/{slot}_256.jpg"


@dataclass(frozen=True)
class PriceBreakdown:
    price: float
    original_price: float
    discount: float
    discount_percent: int


def cdn_image_url(cdn_base_url: str, item_id: str, slot: int = 1) -> str:
    """Return the predictable CDN URL of an item's image slot."""
    path = IMAGE_PATH_TEMPLATE.format(item_id=item_id, slot=slot)
    return f"{cdn_base_url.rstrip('/')}{path}"


def resolve_image_url(stored_images: str | None, catalog_id: str, cdn_base_url: str) -> str:
    """Pick the main image from a comma-separated list of stored paths."""
    main_image = (stored_images or "").split(",")[0].strip()
    if not main_image:
        return cdn_image_url(cdn_base_url, catalog_id)
    if main_image.startswith("http"):
        return main_image
    if not main_image.startswith("/"):
        main_image = f"/{main_image}"
    return f"{cdn_base_url.rstrip('/')}{main_image}"


def resolve_title(name: str | None, category: str, sub_category: str) -> str:
    if name and name.strip():
        return name.strip()
    return f"{category} - {sub_category}"


def describe(name: str | None, category: str, sub_category: str) -> str:
    if name and name.strip():
        return name.strip()
    return (
        f"High-quality {category.lower()} {sub_category.lower()}. "
        "Perfect for your needs with excellent durability and style."
    )


def compute_price_breakdown(price: float, original_price: float) -> PriceBreakdown:
    """Derive the discount from the selling and strikethrough prices.

    The percentage is floored and clamped to [0, 100]; it is 0 whenever the
    original price is not positive.
    """
    discount = original_price - price
    discount_percent = 0
    if original_price > 0:
        discount_percent = math.floor(discount / original_price * 100)
        discount_percent = max(0, min(100, discount_percent))
    return PriceBreakdown(
        price=price,
        original_price=original_price,
        discount=discount,
        discount_percent=discount_percent,
    )


def format_price(amount: float, currency_symbol: str) -> str:
    return f"{currency_symbol}{amount:.0f}"


def format_discount(amount: float, currency_symbol: str) -> str:
    return f"{format_price(max(amount, 0.0), currency_symbol)} OFF"


def row_price_breakdown(row: PriceProductInfo) -> PriceBreakdown:
    return compute_price_breakdown(
        float(row.supplier_listed_price or 0),
        float(row.price_with_shipping or 0),
    )


def to_catalog_item(
    row: PriceProductInfo,
    *,
    cdn_base_url: str,
    currency_symbol: str,
) -> CatalogItem:
    category = row.category or ""
    sub_category = row.sscat or ""
    pricing = row_price_breakdown(row)
    return CatalogItem(
        catalog_id=row.catalog_id,
        product_id=row.product_id,
        image_url=resolve_image_url(row.images, row.catalog_id, cdn_base_url),
        category=category,
        sub_category=sub_category,
        title=resolve_title(row.name, category, sub_category),
        price=format_price(pricing.price, currency_symbol),
        original_price=format_price(pricing.original_price, currency_symbol),
        discount=format_discount(pricing.discount, currency_symbol),
        discount_percent=pricing.discount_percent,
    )
