"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
import random
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.routes import include_api_routes
from storefront.config import settings
from storefront.models.database import Database
from storefront.services.clients.image_prober import ImageProber
from storefront.services.product.synthetic import SyntheticProductData

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the shared store, HTTP client and prober; release them on shutdown."""

    database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    if settings.DB_CREATE_TABLES:
        database.create_tables()
        logger.info("Ensured relational store tables exist")

    http_client = httpx.AsyncClient()
    image_prober = ImageProber(
        http_client,
        probe_timeout=settings.IMAGE_PROBE_TIMEOUT_SECONDS,
        batch_timeout=settings.IMAGE_PROBE_BATCH_TIMEOUT_SECONDS,
        cancel_pending=settings.IMAGE_PROBE_CANCEL_PENDING,
    )
    if settings.SYNTHETIC_SEED is not None:
        logger.info("Placeholder product data seeded with %s", settings.SYNTHETIC_SEED)

    app.state.database = database
    app.state.http_client = http_client
    app.state.image_prober = image_prober
    app.state.synthetic_data = SyntheticProductData(
        random.Random(settings.SYNTHETIC_SEED),
        currency_symbol=settings.CURRENCY_SYMBOL,
    )

    try:
        yield
    finally:
        await image_prober.aclose()
        await http_client.aclose()
        database.dispose()
        logger.info("Released store and HTTP resources")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Storefront API",
        description="Catalog and product detail backend for the storefront",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    _configure_cors(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
