"""FastAPI application setup."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lawnmower_api.api.controller import debug_log_router, products_router
from lawnmower_api.config import AppConfig, get_config
from lawnmower_api.logging_setup import configure_logging
from lawnmower_api.services import (
    CatalogSchema,
    CatalogService,
    DebugLogService,
    create_log_store,
)


def create_app(
    config: Optional[AppConfig] = None,
    catalog_service: Optional[CatalogService] = None,
    debug_log_service: Optional[DebugLogService] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Services may be injected (tests pass fakes); otherwise they are built
    from the configuration.
    """
    config = config or get_config()
    configure_logging(config.logging.level)

    if catalog_service is None:
        catalog_service = CatalogService(
            config.catalog.path,
            CatalogSchema(
                table=config.catalog.table,
                column_style=config.catalog.column_style,
                rear_roller_storage=config.catalog.rear_roller_storage,
            ),
        )

    if debug_log_service is None:
        debug_log_service = DebugLogService(create_log_store(config))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.debug_log_service.close()

    app = FastAPI(
        title="Lawnmower Catalog API",
        description="Product catalog queries and client debug log collection",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.catalog_service = catalog_service
    app.state.debug_log_service = debug_log_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.api.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(products_router)
    app.include_router(debug_log_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
