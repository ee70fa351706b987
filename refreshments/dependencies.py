# refreshments/dependencies.py
import logging

from fastapi import Request

from refreshments.core.config import Settings
from refreshments.repositories.base import CatalogRepository, PurchaseRepository
from refreshments.services.session_service import CounterSession

logger = logging.getLogger(__name__)


def build_repositories(settings: Settings) -> tuple[CatalogRepository, PurchaseRepository]:
    """
    Pick the catalog + purchase stores for STORE_BACKEND.

    Imports are local so the memory backend never needs a database driver
    or Supabase credentials.
    """
    backend = settings.STORE_BACKEND
    logger.info("Using %s store backend", backend)

    if backend == "memory":
        from refreshments.repositories.memory import (
            MemoryCatalogRepository,
            MemoryPurchaseRepository,
        )

        return MemoryCatalogRepository(seed=settings.SEED_CATALOG), MemoryPurchaseRepository()

    if backend == "sql":
        from refreshments.database import build_engine, create_db_and_tables
        from refreshments.repositories.sql import SqlCatalogRepository, SqlPurchaseRepository

        engine = build_engine(settings.DATABASE_URL)
        create_db_and_tables(engine)
        catalog = SqlCatalogRepository(engine)
        if settings.SEED_CATALOG:
            catalog.seed_if_empty()
        return catalog, SqlPurchaseRepository(engine)

    if backend == "supabase":
        from refreshments.core.supabase_client import supabase_public
        from refreshments.repositories.supabase_store import (
            SupabaseCatalogRepository,
            SupabasePurchaseRepository,
        )

        client = supabase_public()
        catalog = SupabaseCatalogRepository(client)
        if settings.SEED_CATALOG:
            catalog.seed_if_empty()
        return catalog, SupabasePurchaseRepository(client)

    raise ValueError(f"Unknown store backend: {backend}")


def get_counter(request: Request) -> CounterSession:
    """
    FastAPI dependency returning the app's single counter session.

    Usage:

        @router.get("/example")
        def example_endpoint(counter: CounterSession = Depends(get_counter)):
            ...
    """
    return request.app.state.counter
