"""
Pytest configuration and fixtures for the refreshments counter.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from refreshments.core.config import Settings
from refreshments.database import create_db_and_tables
from refreshments.main import create_app
from refreshments.repositories.memory import MemoryCatalogRepository, MemoryPurchaseRepository
from refreshments.repositories.sql import SqlCatalogRepository, SqlPurchaseRepository
from refreshments.services.catalog_service import CatalogService
from refreshments.services.purchase_service import PurchaseRecorder
from refreshments.services.report_service import ReportService
from refreshments.services.session_service import CounterSession


@pytest.fixture
def settings():
    return Settings(STORE_BACKEND="memory", SEED_CATALOG=True, REPORT_TIMEZONE="UTC")


@pytest.fixture
def sql_engine():
    """
    In-memory SQLite shared across connections, with all tables created.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def repos(request):
    """
    Catalog + purchase stores for every local backend, seeded with the
    starter menu.
    """
    if request.param == "memory":
        return MemoryCatalogRepository(seed=True), MemoryPurchaseRepository()

    engine = request.getfixturevalue("sql_engine")
    catalog = SqlCatalogRepository(engine)
    catalog.seed_if_empty()
    return catalog, SqlPurchaseRepository(engine)


@pytest.fixture
def counter(repos):
    catalog_repo, purchase_repo = repos
    session = CounterSession(
        catalog=CatalogService(catalog_repo),
        recorder=PurchaseRecorder(purchase_repo),
        reports=ReportService("UTC"),
    )
    session.load()
    return session


@pytest.fixture
def client(settings):
    """
    API client on a fresh memory-backed counter.
    """
    app = create_app(
        settings,
        catalog_repo=MemoryCatalogRepository(seed=True),
        purchase_repo=MemoryPurchaseRepository(),
    )
    with TestClient(app) as test_client:
        yield test_client
