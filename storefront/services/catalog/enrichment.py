"""Bulk enrichment of catalog candidates from the relational store."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from storefront.models.catalog import CatalogItem
from storefront.services.catalog.conversion import to_catalog_item
from storefront.services.storage.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class EnrichmentReader:
    """Loads pricing, taxonomy, name and image data for catalog ids.

    Output follows the store's row order, not the order of the input ids.
    StoreError from the query propagates to the caller.
    """

    def __init__(
        self,
        store: CatalogStore,
        *,
        cdn_base_url: str,
        currency_symbol: str,
    ) -> None:
        self.store = store
        self.cdn_base_url = cdn_base_url
        self.currency_symbol = currency_symbol

    async def load(self, catalog_ids: Sequence[str]) -> list[CatalogItem]:
        rows = await self.store.fetch_by_catalog_ids(catalog_ids)
        items = [
            to_catalog_item(
                row,
                cdn_base_url=self.cdn_base_url,
                currency_symbol=self.currency_symbol,
            )
            for row in rows
        ]
        missing = len(set(catalog_ids)) - len({item.catalog_id for item in items})
        if missing:
            logger.info("%d catalog ids had no pricing row", missing)
        return items
