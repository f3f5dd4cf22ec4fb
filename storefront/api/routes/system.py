"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter

from storefront.api.dependencies import StoreDependency
from storefront.config import settings

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict:
    """Service banner listing the exposed endpoint groups."""

    return {
        "message": "Storefront API is running",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "catalog": "/api/v1/catalog",
            "product": "/api/v1/product/{product_id}",
        },
    }


@router.get("/health")
async def health_check(store: StoreDependency) -> dict[str, str]:
    """Health check endpoint with relational store connectivity check."""

    database_status = "connected" if await store.ping() else "disconnected"

    return {
        "status": "healthy",
        "database": database_status,
        "environment": settings.ENVIRONMENT,
    }
