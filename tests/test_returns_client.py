"""Tests for the returns (RTO) candidate client."""

import httpx
import pytest

from storefront.services.clients.returns_client import HttpReturnsClient
from storefront.services.errors import CollaboratorError

RTO_URL = "http://rto.test/api/rto/"


def _returns_client(handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpReturnsClient(http_client=http_client, base_url=RTO_URL, timeout=1.0), http_client


@pytest.mark.asyncio
async def test_fetch_catalog_ids_reads_rto_list():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(
            200,
            json={
                "success": True,
                "code": "BLR01",
                "rto_list": {
                    "a": {"catalog_id": 3461848, "product_id": 1, "rto_count": 4},
                    "b": {"catalog_id": 1119458, "product_id": 2, "rto_count": 2},
                },
                "total_items": 2,
            },
        )

    client, http_client = _returns_client(handler)
    async with http_client:
        catalog_ids = await client.fetch_catalog_ids("BLR01")

    assert seen == ["http://rto.test/api/rto/BLR01"]
    assert catalog_ids == ["3461848", "1119458"]


@pytest.mark.asyncio
async def test_success_false_raises():
    client, http_client = _returns_client(
        lambda request: httpx.Response(200, json={"success": False})
    )
    async with http_client:
        with pytest.raises(CollaboratorError) as excinfo:
            await client.fetch_catalog_ids("BLR01")

    assert excinfo.value.service == "returns"


def _connect_error(request):
    raise httpx.ConnectError("connection refused", request=request)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "handler",
    [
        _connect_error,
        lambda request: httpx.Response(500, text="boom"),
        lambda request: httpx.Response(200, text="not json"),
        lambda request: httpx.Response(200, content=b"\x80garbage"),
    ],
    ids=["unreachable", "non-2xx", "not-json", "not-utf8"],
)
async def test_failures_yield_empty_list_with_fallback(handler):
    client, http_client = _returns_client(handler)
    async with http_client:
        catalog_ids = await client.fetch_catalog_ids_with_fallback("BLR01")

    assert catalog_ids == []
