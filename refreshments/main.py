# refreshments/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from refreshments.core.config import Settings, get_settings
from refreshments.core.errors import (
    EmptyCartError,
    NotFoundError,
    PersistenceError,
    RefreshmentsError,
    StateError,
    ValidationError,
)
from refreshments.dependencies import build_repositories
from refreshments.repositories.base import CatalogRepository, PurchaseRepository
from refreshments.services.catalog_service import CatalogService
from refreshments.services.purchase_service import PurchaseRecorder
from refreshments.services.report_service import ReportService
from refreshments.services.session_service import CounterSession

# Routers
from refreshments.routers.cart import router as cart_router
from refreshments.routers.checkout import router as checkout_router
from refreshments.routers.items import router as items_router
from refreshments.routers.manage import router as manage_router
from refreshments.routers.purchases import router as purchases_router
from refreshments.routers.reports import router as reports_router
from refreshments.routers.session import router as session_router

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[RefreshmentsError], int] = {
    ValidationError: 422,
    NotFoundError: 404,
    EmptyCartError: 400,
    StateError: 409,
    PersistenceError: 503,
}


async def refreshments_error_handler(request: Request, exc: RefreshmentsError) -> JSONResponse:
    """
    Turn any counter error into one notification payload.

    The session is left as it was before the failed action.
    """
    status_code = STATUS_BY_ERROR.get(type(exc), 400)
    if isinstance(exc, PersistenceError):
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc
        )
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


def create_app(
    settings: Settings | None = None,
    catalog_repo: CatalogRepository | None = None,
    purchase_repo: PurchaseRepository | None = None,
) -> FastAPI:
    """
    Build the API around one counter session.

    Stores are picked from settings unless both are passed in.
    """
    settings = settings or get_settings()

    if catalog_repo is None or purchase_repo is None:
        catalog_repo, purchase_repo = build_repositories(settings)

    counter = CounterSession(
        catalog=CatalogService(catalog_repo),
        recorder=PurchaseRecorder(purchase_repo),
        reports=ReportService(settings.REPORT_TIMEZONE),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Startup:
          - Load catalog + purchase history into the counter session.
        """
        logger.info("🔄 Startup: loading catalog (%s store)...", settings.STORE_BACKEND)
        try:
            counter.load()
            logger.info("✅ Startup: counter ready.")
        except PersistenceError as e:
            logger.error(f"❌ Startup: store unavailable: {e}")
            raise
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME or "Refreshments Counter API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.counter = counter

    app.add_exception_handler(RefreshmentsError, refreshments_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Versioned API prefix, e.g. /api/v1
    app.include_router(session_router, prefix=settings.API_V1_STR)
    app.include_router(items_router, prefix=settings.API_V1_STR)
    app.include_router(manage_router, prefix=settings.API_V1_STR)
    app.include_router(cart_router, prefix=settings.API_V1_STR)
    app.include_router(checkout_router, prefix=settings.API_V1_STR)
    app.include_router(purchases_router, prefix=settings.API_V1_STR)
    app.include_router(reports_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "refreshments-counter"}

    return app


settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)

app = create_app(settings)
