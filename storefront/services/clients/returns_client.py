"""Returns (RTO) client abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx
from pydantic import ValidationError as PydanticValidationError

from storefront.models.collaborators import RTOResponse
from storefront.services.errors import CollaboratorError

logger = logging.getLogger(__name__)

_SERVICE = "returns"


class ReturnsClient(ABC):
    """Abstract interface to the returns-to-origin candidate service."""

    @abstractmethod
    async def fetch_catalog_ids(self, code: str) -> list[str]:
        """Return catalog ids associated with the user's code."""

    async def fetch_catalog_ids_with_fallback(self, code: str) -> list[str]:
        """Same as fetch_catalog_ids but yields an empty list on any failure."""
        try:
            catalog_ids = await self.fetch_catalog_ids(code)
        except CollaboratorError as exc:
            logger.warning("Failed to get catalog ids from RTO API: %s", exc)
            return []
        if not catalog_ids:
            logger.warning("RTO API returned empty result for code %s", code)
        return catalog_ids


class HttpReturnsClient(ReturnsClient):
    """Returns implementation backed by the RTO HTTP API."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str,
        timeout: float = 10.0,
    ) -> None:
        if not base_url:
            raise ValueError("RTO API URL is required to initialize returns client")
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def fetch_catalog_ids(self, code: str) -> list[str]:
        url = f"{self._base_url}/{code}"
        logger.info("Calling RTO API: %s", url)
        try:
            response = await self._http.get(url, timeout=self._timeout)
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
            payload = RTOResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise CollaboratorError(_SERVICE, f"malformed body: {exc}") from exc

        if not payload.success:
            raise CollaboratorError(_SERVICE, "success field is false")

        catalog_ids = [str(item.catalog_id) for item in payload.rto_list.values()]
        logger.info(
            "Got %d catalog ids from RTO API for code '%s'", len(catalog_ids), code
        )
        return catalog_ids
