"""Product detail assembly with placeholder fallback."""

from __future__ import annotations

import logging
import time

from storefront.models.product import ProductDetails, ProductDetailsResponse, ProductMeta
from storefront.models.tables import PriceProductInfo
from storefront.services.catalog.conversion import (
    cdn_image_url,
    describe,
    format_discount,
    format_price,
    resolve_image_url,
    resolve_title,
    row_price_breakdown,
)
from storefront.services.clients.image_prober import ImageProber
from storefront.services.errors import NotFoundError, StoreError
from storefront.services.product.synthetic import SyntheticProductData
from storefront.services.storage.catalog_store import CatalogStore

logger = logging.getLogger(__name__)

SOURCE_STORE = "product_info_table"
SOURCE_MOCK = "Mock Data"
MOCK_IMAGE_PRODUCT_ID = "1234567"
EXTRA_IMAGE_SLOTS = range(2, 6)
DEFAULT_IMAGE_OWNER = "default"


class ProductDetailAssembler:
    """Resolves one product and decorates it for the product page.

    A missing row or a failing store yields a placeholder product; the caller
    always receives a successful response.
    """

    def __init__(
        self,
        *,
        store: CatalogStore,
        image_prober: ImageProber,
        synthetic: SyntheticProductData,
        cdn_base_url: str,
        currency_symbol: str,
    ) -> None:
        self.store = store
        self.image_prober = image_prober
        self.synthetic = synthetic
        self.cdn_base_url = cdn_base_url
        self.currency_symbol = currency_symbol

    async def get_product_details(
        self, product_id: str, user_id: str
    ) -> ProductDetailsResponse:
        started = time.perf_counter()

        row = await self._load_row(product_id)
        if row is not None:
            details = self._from_row(row)
            details.main_image = await self._verify_main_image(details.main_image)
            details = self.synthetic.enrich(details)
            image_owner = row.product_id
            source = SOURCE_STORE
            message = "Product details retrieved successfully"
        else:
            main_image = cdn_image_url(self.cdn_base_url, MOCK_IMAGE_PRODUCT_ID)
            details = self.synthetic.mock_product(product_id, main_image)
            image_owner = MOCK_IMAGE_PRODUCT_ID
            source = SOURCE_MOCK
            message = "Product details retrieved successfully (mock data)"

        details.images = await self._build_images(image_owner, details.main_image)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        return ProductDetailsResponse(
            message=message,
            data=details,
            meta=ProductMeta(
                product_id=product_id,
                user_id=user_id,
                source=source,
                response_time_ms=elapsed_ms,
            ),
        )

    async def _load_row(self, product_id: str) -> PriceProductInfo | None:
        try:
            row = await self.store.fetch_by_product_id(product_id)
        except NotFoundError:
            logger.info("Product %s not in store, serving mock data", product_id)
            return None
        except StoreError as exc:
            logger.warning(
                "Store lookup failed for product %s, serving mock data: %s",
                product_id,
                exc,
            )
            return None
        logger.debug("Found product in database: %s", row.product_id)
        return row

    def _from_row(self, row: PriceProductInfo) -> ProductDetails:
        category = row.category or ""
        sub_category = row.sscat or ""
        pricing = row_price_breakdown(row)
        main_image = resolve_image_url(row.images, row.catalog_id, self.cdn_base_url)
        return ProductDetails(
            product_id=row.product_id,
            catalog_id=row.catalog_id,
            title=resolve_title(row.name, category, sub_category),
            description=describe(row.name, category, sub_category),
            category=category,
            sub_category=sub_category,
            price=format_price(pricing.price, self.currency_symbol),
            original_price=format_price(pricing.original_price, self.currency_symbol),
            discount=format_discount(pricing.discount, self.currency_symbol),
            discount_percent=pricing.discount_percent,
            main_image=main_image,
            brand=row.brand_name or "",
        )

    async def _verify_main_image(self, main_image: str) -> str:
        if await self.image_prober.exists(main_image):
            return main_image
        logger.info("Main image not found, using default: %s", main_image)
        return cdn_image_url(self.cdn_base_url, DEFAULT_IMAGE_OWNER)

    async def _build_images(self, image_owner: str, main_image: str) -> list[str]:
        candidates = [
            cdn_image_url(self.cdn_base_url, image_owner, slot)
            for slot in EXTRA_IMAGE_SLOTS
        ]
        existing = await self.image_prober.filter_existing(candidates)
        return [main_image, *(url for url in existing if url != main_image)]
