"""Tests for system-level endpoints."""

import pytest


@pytest.mark.asyncio
async def test_root_banner(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Storefront API is running"


@pytest.mark.asyncio
async def test_health_reports_database(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"


def test_debug_setting_reaches_the_app(monkeypatch):
    from storefront.application import create_app
    from storefront.config import settings

    monkeypatch.setattr(settings, "DEBUG", True)

    assert create_app().debug is True
