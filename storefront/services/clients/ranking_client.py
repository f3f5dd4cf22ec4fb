"""Ranking client abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError

from storefront.models.collaborators import (
    RankedCandidate,
    RankedOrder,
    RankingRequest,
    RankingResponse,
)
from storefront.services.errors import CollaboratorError

logger = logging.getLogger(__name__)

_SERVICE = "ranking"


class RankingClient(ABC):
    """Abstract interface to the personalization/ranking service."""

    @abstractmethod
    async def rank(
        self, catalog_ids: Sequence[str], user_id: str
    ) -> list[RankedCandidate]:
        """Return candidates ordered most to least relevant.

        Raises CollaboratorError when the service is unreachable, times out or
        answers with an unusable payload.
        """

    async def rank_with_fallback(
        self, catalog_ids: Sequence[str], user_id: str
    ) -> RankedOrder:
        """Rank the candidates, keeping the input order when ranking is unusable."""

        original = list(catalog_ids)
        if not original:
            return RankedOrder(catalog_ids=original, personalized=False)

        logger.info(
            "Calling ranking API for user %s with %d catalog ids",
            user_id,
            len(original),
        )
        try:
            ranked = await self.rank(original, user_id)
        except CollaboratorError as exc:
            logger.warning("Ranking unavailable, using original order: %s", exc)
            return RankedOrder(catalog_ids=original, personalized=False)

        known = set(original)
        ordered = [candidate.catalog_id for candidate in ranked]
        kept = [catalog_id for catalog_id in ordered if catalog_id in known]
        if len(kept) != len(ordered):
            logger.warning(
                "Ranking API returned %d ids that were not requested; ignoring them",
                len(ordered) - len(kept),
            )
        if not kept:
            logger.warning("Ranking API returned empty result, using original order")
            return RankedOrder(catalog_ids=original, personalized=False)

        logger.info("Got %d ranked catalog ids from ranking API", len(kept))
        return RankedOrder(catalog_ids=kept, personalized=True)


class HttpRankingClient(RankingClient):
    """Ranking implementation that POSTs candidates to the ranking service."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        url: str,
        timeout: float = 10.0,
    ) -> None:
        if not url:
            raise ValueError("Ranking API URL is required to initialize ranking client")
        self._http = http_client
        self._url = url
        self._timeout = timeout

    async def rank(
        self, catalog_ids: Sequence[str], user_id: str
    ) -> list[RankedCandidate]:
        request = RankingRequest(catalog_ids=list(catalog_ids), user_id=user_id)
        try:
            response = await self._http.post(
                self._url,
                json=request.model_dump(),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise CollaboratorError(_SERVICE, f"timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise CollaboratorError(_SERVICE, f"transport error: {exc}") from exc

        if not response.is_success:
            raise CollaboratorError(
                _SERVICE,
                f"status {response.status_code}: {response.text[:200]}",
            )

        try:
            payload = RankingResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise CollaboratorError(_SERVICE, f"malformed body: {exc}") from exc

        if not payload.success:
            raise CollaboratorError(_SERVICE, "success field is false")

        ranked = [
            RankedCandidate(
                catalog_id=item.catalog_id,
                score=item.pctr_score,
                position=position,
            )
            for position, item in enumerate(payload.ranked_catalogs)
        ]
        if ranked:
            logger.debug(
                "Top ranked catalog: %s (PCTR: %.6f)",
                ranked[0].catalog_id,
                ranked[0].score,
            )
        return ranked
