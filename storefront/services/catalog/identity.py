"""Maps user identifiers to the code used by the returns service."""

from __future__ import annotations

import logging

from storefront.services.storage.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Thin lookup over the user_mapping table.

    A miss raises NotFoundError; callers treat that as a signal to fall back,
    not as an error for the end user.
    """

    def __init__(self, store: CatalogStore):
        self.store = store

    async def resolve_code(self, user_id: str) -> str:
        code = await self.store.get_user_code(user_id)
        logger.debug("Resolved user %s to code %s", user_id, code)
        return code
