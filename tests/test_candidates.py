"""Tests for identity resolution and candidate source selection."""

from unittest.mock import AsyncMock

import pytest

from storefront.models.tables import UserMapping
from storefront.services.catalog.candidates import (
    FALLBACK_CATALOG_IDS,
    CandidateSourceSelector,
    validate_catalog_ids,
)
from storefront.services.catalog.identity import IdentityResolver
from storefront.services.errors import CollaboratorError, NotFoundError, StoreError
from storefront.services.storage.catalog_store import CatalogStore


@pytest.fixture()
def selector(database, returns_stub):
    return CandidateSourceSelector(IdentityResolver(CatalogStore(database)), returns_stub)


def test_fallback_list_is_large_and_unique():
    assert len(FALLBACK_CATALOG_IDS) == 100
    assert len(set(FALLBACK_CATALOG_IDS)) == 100
    assert validate_catalog_ids(FALLBACK_CATALOG_IDS) == list(FALLBACK_CATALOG_IDS)


def test_validate_catalog_ids_applies_length_bounds():
    ids = ["1119458", " 3461848 ", "", "48", "1" * 21, "1" * 20, "abcd"]

    assert validate_catalog_ids(ids) == ["1119458", "3461848", "1" * 20, "abcd"]


@pytest.mark.asyncio
async def test_resolve_code(database, mapped_user):
    resolver = IdentityResolver(CatalogStore(database))

    assert await resolver.resolve_code(mapped_user) == "BLR01"


@pytest.mark.asyncio
async def test_resolve_code_without_mapping(database, known_user):
    resolver = IdentityResolver(CatalogStore(database))

    with pytest.raises(NotFoundError):
        await resolver.resolve_code(known_user)


@pytest.mark.asyncio
async def test_resolve_code_with_empty_code(database, known_user, seed):
    seed(UserMapping(user_id=known_user, code="", city="Pune", state="MH"))
    resolver = IdentityResolver(CatalogStore(database))

    with pytest.raises(NotFoundError):
        await resolver.resolve_code(known_user)


@pytest.mark.asyncio
async def test_live_candidates_when_returns_has_ids(selector, mapped_user, returns_stub):
    returns_stub.codes["BLR01"] = ["3461848", "1119458"]

    selection = await selector.select(mapped_user)

    assert selection.is_live is True
    assert selection.catalog_ids == ["3461848", "1119458"]
    assert returns_stub.requested == ["BLR01"]


@pytest.mark.asyncio
async def test_no_mapping_uses_fallback_without_calling_returns(
    selector, known_user, returns_stub
):
    selection = await selector.select(known_user)

    assert selection.is_live is False
    assert selection.catalog_ids == list(FALLBACK_CATALOG_IDS)
    assert returns_stub.requested == []


@pytest.mark.asyncio
async def test_returns_failure_uses_fallback(selector, mapped_user, returns_stub):
    returns_stub.error = CollaboratorError("returns", "timed out")

    selection = await selector.select(mapped_user)

    assert selection.is_live is False
    assert selection.catalog_ids == list(FALLBACK_CATALOG_IDS)


@pytest.mark.asyncio
async def test_returns_empty_uses_fallback(selector, mapped_user):
    selection = await selector.select(mapped_user)

    assert selection.is_live is False


@pytest.mark.asyncio
async def test_store_failure_during_identity_uses_fallback(returns_stub):
    store = AsyncMock(spec=CatalogStore)
    store.get_user_code.side_effect = StoreError("database is locked")
    selector = CandidateSourceSelector(
        IdentityResolver(store), returns_stub, fallback_ids=["1119458", "3461848"]
    )

    selection = await selector.select("user_abc123")

    assert selection.catalog_ids == ["1119458", "3461848"]
    assert selection.is_live is False
    assert returns_stub.requested == []
