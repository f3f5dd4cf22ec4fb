"""Pytest configuration and fixtures for the storefront service."""

import asyncio
import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from storefront.api.dependencies import (
    get_database,
    get_image_prober,
    get_ranking_client,
    get_returns_client,
    get_synthetic_data,
)
from storefront.models.collaborators import RankedCandidate
from storefront.models.database import Database
from storefront.models.tables import PriceProductInfo, User, UserMapping
from storefront.services.clients.ranking_client import RankingClient
from storefront.services.clients.returns_client import ReturnsClient
from storefront.services.errors import CollaboratorError
from storefront.services.product.synthetic import SyntheticProductData


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


class StubRankingClient(RankingClient):
    """Ranking stub: reverses candidates unless told otherwise."""

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], str]] = []
        self.ranked_ids: list[str] | None = None
        self.error: CollaboratorError | None = None

    async def rank(self, catalog_ids, user_id):
        await asyncio.sleep(0)
        self.calls.append((list(catalog_ids), user_id))
        if self.error is not None:
            raise self.error
        ordered = (
            self.ranked_ids if self.ranked_ids is not None else list(reversed(catalog_ids))
        )
        return [
            RankedCandidate(catalog_id=catalog_id, score=1.0 / (index + 1), position=index)
            for index, catalog_id in enumerate(ordered)
        ]


class StubReturnsClient(ReturnsClient):
    def __init__(self) -> None:
        self.codes: dict[str, list[str]] = {}
        self.error: CollaboratorError | None = None
        self.requested: list[str] = []

    async def fetch_catalog_ids(self, code):
        await asyncio.sleep(0)
        self.requested.append(code)
        if self.error is not None:
            raise self.error
        return list(self.codes.get(code, []))


class StubImageProber:
    """Accepts every URL listed in ``existing``."""

    def __init__(self) -> None:
        self.existing: set[str] = set()
        self.probed: list[list[str]] = []
        self.checked: list[str] = []

    async def exists(self, url):
        await asyncio.sleep(0)
        self.checked.append(url)
        return url in self.existing

    async def filter_existing(self, urls):
        await asyncio.sleep(0)
        self.probed.append(list(urls))
        return [url for url in urls if url in self.existing]


def make_price_row(catalog_id: str, product_id: str | None = None, **overrides):
    values = {
        "catalog_id": catalog_id,
        "product_id": product_id or f"p{catalog_id}",
        "category": "Fashion",
        "sscat": "Kurtis",
        "name": f"Item {catalog_id}",
        "images": f"/images/products/{catalog_id}/1_512.jpg",
        "brand_name": None,
        "supplier_listed_price": 400.0,
        "shipping_revenue": 50.0,
        "price_with_shipping": 500.0,
    }
    values.update(overrides)
    return PriceProductInfo(**values)


@pytest.fixture()
def price_row():
    """Factory for pricing rows with sensible defaults."""
    return make_price_row


@pytest.fixture()
def database():
    """Isolated in-memory relational store per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database(engine=engine)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture()
def seed(database):
    """Insert ORM rows into the test store."""

    def _seed(*rows):
        with database.session() as session:
            session.add_all(rows)
            session.commit()

    return _seed


@pytest.fixture()
def known_user(seed):
    seed(User(user_id="user_abc123", phone_number="9876543210", name="User 3210"))
    return "user_abc123"


@pytest.fixture()
def mapped_user(seed, known_user):
    seed(UserMapping(user_id=known_user, code="BLR01", city="Bengaluru", state="KA"))
    return known_user


@pytest.fixture()
def ranking_stub():
    return StubRankingClient()


@pytest.fixture()
def returns_stub():
    return StubReturnsClient()


@pytest.fixture()
def image_prober_stub():
    return StubImageProber()


@pytest.fixture()
def synthetic_data():
    return SyntheticProductData(random.Random(1234))


@pytest.fixture()
def app_overrides(database, ranking_stub, returns_stub, image_prober_stub, synthetic_data):
    """Point every dependency of the app at test doubles."""
    from storefront.main import app

    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_ranking_client] = lambda: ranking_stub
    app.dependency_overrides[get_returns_client] = lambda: returns_stub
    app.dependency_overrides[get_image_prober] = lambda: image_prober_stub
    app.dependency_overrides[get_synthetic_data] = lambda: synthetic_data
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(app_overrides):
    """Return an HTTPX async client pointing at the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app_overrides),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
