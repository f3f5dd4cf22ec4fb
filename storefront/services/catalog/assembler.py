"""Catalog assembly: candidates, ranking, enrichment and re-ordering."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from storefront.models.catalog import CatalogItem, CatalogMeta, CatalogResponse
from storefront.models.collaborators import RankedOrder
from storefront.services.catalog.candidates import (
    CandidateSourceSelector,
    validate_catalog_ids,
)
from storefront.services.catalog.enrichment import EnrichmentReader
from storefront.services.clients.ranking_client import RankingClient
from storefront.services.errors import ValidationError

logger = logging.getLogger(__name__)

SOURCE_RTO_RANKED = "rto_api_with_ranking"
SOURCE_FALLBACK_RANKED = "fallback_catalog_ids_with_ranking"
SOURCE_DIRECT_RANKED = "direct_request_with_ranking"
DIRECT_REQUEST_USER = "direct_request"

T = TypeVar("T")


def resort_by_rank(
    items: Sequence[T],
    ranked_ids: Sequence[str],
    key: Callable[[T], str] = lambda item: item.catalog_id,
) -> list[T]:
    """Reorder items to follow ranked_ids.

    The first occurrence of an id in ranked_ids defines its position. Items
    whose id is not ranked sort after every ranked item and keep their
    relative order.
    """
    positions: dict[str, int] = {}
    for index, catalog_id in enumerate(ranked_ids):
        positions.setdefault(catalog_id, index)
    unranked = len(ranked_ids)
    return sorted(items, key=lambda item: positions.get(key(item), unranked))


class CatalogAssembler:
    """Runs the catalog pipeline and builds the response envelope."""

    def __init__(
        self,
        *,
        candidates: CandidateSourceSelector,
        ranking: RankingClient,
        enrichment: EnrichmentReader,
    ) -> None:
        self.candidates = candidates
        self.ranking = ranking
        self.enrichment = enrichment

    async def build_for_user(self, user_id: str) -> CatalogResponse:
        """Personalized listing for a known user."""
        selection = await self.candidates.select(user_id)
        source = SOURCE_RTO_RANKED if selection.is_live else SOURCE_FALLBACK_RANKED
        return await self._assemble(selection.catalog_ids, user_id, source)

    async def build_for_catalog_ids(
        self,
        catalog_ids: Sequence[str],
        user_id: str | None = None,
    ) -> CatalogResponse:
        """Listing for an explicit caller-supplied list of catalog ids."""
        valid_ids = validate_catalog_ids(catalog_ids)
        if not valid_ids:
            raise ValidationError("no valid catalog ids supplied")
        if len(valid_ids) != len(catalog_ids):
            logger.info(
                "Dropped %d invalid catalog ids from direct request",
                len(catalog_ids) - len(valid_ids),
            )
        return await self._assemble(
            valid_ids,
            user_id or DIRECT_REQUEST_USER,
            SOURCE_DIRECT_RANKED,
        )

    async def _assemble(
        self,
        catalog_ids: list[str],
        user_id: str,
        source: str,
    ) -> CatalogResponse:
        order: RankedOrder = await self.ranking.rank_with_fallback(catalog_ids, user_id)
        items: list[CatalogItem] = await self.enrichment.load(order.catalog_ids)
        ordered = resort_by_rank(items, order.catalog_ids)

        logger.info(
            "[catalog-assembly]",
            extra={
                "user_id": user_id,
                "source": source,
                "candidates": len(catalog_ids),
                "ranking_applied": order.personalized,
                "products": len(ordered),
            },
        )
        return CatalogResponse(
            data=ordered,
            meta=CatalogMeta(
                total_products=len(ordered),
                user_id=user_id,
                source=source,
                ranking_applied=order.personalized,
            ),
        )
