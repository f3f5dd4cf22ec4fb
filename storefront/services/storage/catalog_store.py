"""Relational store access for users, identity codes and catalog pricing rows."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError

from storefront.models.database import Database
from storefront.models.tables import PriceProductInfo, User, UserMapping
from storefront.services.errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)


class CatalogStore:
    """Read-only query facade over the relational store.

    Every call opens its own session on a worker thread so the event loop is
    never blocked by the database driver.
    """

    def __init__(self, database: Database):
        self.database = database

    async def get_user(self, user_id: str) -> User:
        """Return the user row or raise NotFoundError."""
        user = await self._run(self._get_user, user_id)
        if user is None:
            raise NotFoundError(f"user {user_id} not found")
        return user

    async def get_user_code(self, user_id: str) -> str:
        """Return the downstream code mapped to the user."""
        mapping = await self._run(self._get_user_mapping, user_id)
        if mapping is None:
            raise NotFoundError(f"no user mapping for user_id {user_id}")
        if not mapping.code:
            raise NotFoundError(f"no code found for user_id {user_id}")
        return mapping.code

    async def fetch_by_catalog_ids(
        self, catalog_ids: Sequence[str]
    ) -> list[PriceProductInfo]:
        """Bulk-load pricing rows; ids without a row are simply absent."""
        unique_ids = list(dict.fromkeys(catalog_ids))
        if not unique_ids:
            return []
        rows = await self._run(self._fetch_by_catalog_ids, unique_ids)
        logger.debug(
            "Loaded %d pricing rows for %d catalog ids", len(rows), len(unique_ids)
        )
        return rows

    async def fetch_by_product_id(self, product_id: str) -> PriceProductInfo:
        """Return the first pricing row for the product or raise NotFoundError."""
        row = await self._run(self._fetch_by_product_id, product_id)
        if row is None:
            raise NotFoundError(f"product {product_id} not found")
        return row

    async def ping(self) -> bool:
        try:
            await self._run(self._ping)
        except StoreError:
            return False
        return True

    async def _run(self, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except SQLAlchemyError as exc:
            logger.error("Relational store query failed: %s", exc)
            raise StoreError(str(exc)) from exc

    def _get_user(self, user_id: str) -> User | None:
        with self.database.session() as db:
            return db.execute(
                select(User).where(User.user_id == user_id)
            ).scalar_one_or_none()

    def _get_user_mapping(self, user_id: str) -> UserMapping | None:
        with self.database.session() as db:
            return (
                db.execute(
                    select(UserMapping)
                    .where(UserMapping.user_id == user_id)
                    .order_by(UserMapping.id)
                )
                .scalars()
                .first()
            )

    def _fetch_by_catalog_ids(self, catalog_ids: list[str]) -> list[PriceProductInfo]:
        with self.database.session() as db:
            return list(
                db.execute(
                    select(PriceProductInfo).where(
                        PriceProductInfo.catalog_id.in_(catalog_ids)
                    )
                )
                .scalars()
                .all()
            )

    def _fetch_by_product_id(self, product_id: str) -> PriceProductInfo | None:
        with self.database.session() as db:
            return (
                db.execute(
                    select(PriceProductInfo)
                    .where(PriceProductInfo.product_id == product_id)
                    .order_by(PriceProductInfo.id)
                )
                .scalars()
                .first()
            )

    def _ping(self) -> None:
        with self.database.session() as db:
            db.execute(text("SELECT 1"))
