"""FastAPI dependency wiring for stores, collaborator clients and assemblers.

Long-lived resources (engine, HTTP client, image prober, random source) are
created by the application lifespan and kept on ``app.state``; the request
scoped objects below are built from them.
"""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Query, Request, status

from storefront.config import settings
from storefront.models.database import Database
from storefront.services.catalog.assembler import CatalogAssembler
from storefront.services.catalog.candidates import CandidateSourceSelector
from storefront.services.catalog.enrichment import EnrichmentReader
from storefront.services.catalog.identity import IdentityResolver
from storefront.services.clients.image_prober import ImageProber
from storefront.services.clients.ranking_client import HttpRankingClient, RankingClient
from storefront.services.clients.returns_client import HttpReturnsClient, ReturnsClient
from storefront.services.errors import NotFoundError, StoreError
from storefront.services.product.assembler import ProductDetailAssembler
from storefront.services.product.synthetic import SyntheticProductData
from storefront.services.storage.catalog_store import CatalogStore


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_image_prober(request: Request) -> ImageProber:
    return request.app.state.image_prober


def get_synthetic_data(request: Request) -> SyntheticProductData:
    return request.app.state.synthetic_data


def get_catalog_store(
    database: Annotated[Database, Depends(get_database)],
) -> CatalogStore:
    return CatalogStore(database)


def get_ranking_client(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> RankingClient:
    return HttpRankingClient(
        http_client=http_client,
        url=settings.RANKING_API_URL,
        timeout=settings.RANKING_TIMEOUT_SECONDS,
    )


def get_returns_client(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> ReturnsClient:
    return HttpReturnsClient(
        http_client=http_client,
        base_url=settings.RTO_API_URL,
        timeout=settings.RTO_TIMEOUT_SECONDS,
    )


StoreDependency = Annotated[CatalogStore, Depends(get_catalog_store)]
RankingDependency = Annotated[RankingClient, Depends(get_ranking_client)]
ReturnsDependency = Annotated[ReturnsClient, Depends(get_returns_client)]
ImageProberDependency = Annotated[ImageProber, Depends(get_image_prober)]
SyntheticDependency = Annotated[SyntheticProductData, Depends(get_synthetic_data)]


def build_catalog_assembler(
    store: StoreDependency,
    ranking: RankingDependency,
    returns: ReturnsDependency,
) -> CatalogAssembler:
    return CatalogAssembler(
        candidates=CandidateSourceSelector(IdentityResolver(store), returns),
        ranking=ranking,
        enrichment=EnrichmentReader(
            store,
            cdn_base_url=settings.CDN_BASE_URL,
            currency_symbol=settings.CURRENCY_SYMBOL,
        ),
    )


def build_product_assembler(
    store: StoreDependency,
    image_prober: ImageProberDependency,
    synthetic: SyntheticDependency,
) -> ProductDetailAssembler:
    return ProductDetailAssembler(
        store=store,
        image_prober=image_prober,
        synthetic=synthetic,
        cdn_base_url=settings.CDN_BASE_URL,
        currency_symbol=settings.CURRENCY_SYMBOL,
    )


async def require_existing_user(
    store: StoreDependency,
    user_id: Annotated[
        str | None,
        Query(description="Identifier of an existing user"),
    ] = None,
) -> str:
    """Reject requests without a user id or for an unknown user."""

    if not user_id or not user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="user_id is required as query parameter",
        )
    try:
        await store.get_user(user_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        ) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to validate user",
        ) from exc
    return user_id


CatalogAssemblerDependency = Annotated[CatalogAssembler, Depends(build_catalog_assembler)]
ProductAssemblerDependency = Annotated[
    ProductDetailAssembler, Depends(build_product_assembler)
]
ExistingUserDependency = Annotated[str, Depends(require_existing_user)]
