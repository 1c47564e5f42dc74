from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hostel_laundry.api.v1.router import router as api_v1_router
from hostel_laundry.config.logging import setup_logging
from hostel_laundry.config.settings import Settings, settings as default_settings
from hostel_laundry.core.error_handlers import register_exception_handlers
from hostel_laundry.core.logging import get_logger
from hostel_laundry.core.middleware import register_middlewares
from hostel_laundry.repositories.store_factory import StoreProvider, create_store_provider
from hostel_laundry.services.notification.email_service import EmailSender, create_email_sender

logger = get_logger(__name__)


def create_app(
    config: Optional[Settings] = None,
    store_provider: Optional[StoreProvider] = None,
    email_sender: Optional[EmailSender] = None,
) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Chooses the data store (database or demo fixtures) and the email sink once.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    config = config or default_settings
    setup_logging(config)

    app = FastAPI(
        title=config.APP_NAME,
        debug=config.DEBUG,
        version=config.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS Configuration
    if config.CORS_ORIGINS and config.CORS_ORIGINS != ["*"]:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Register shared core middlewares (request ID, timing, etc.)
    register_middlewares(app)
    register_exception_handlers(app)

    provider = store_provider or create_store_provider(config)
    app.state.settings = config
    app.state.store_provider = provider
    app.state.email_sender = email_sender or create_email_sender(config, demo=provider.is_demo)
    logger.info(
        f"{config.APP_NAME} v{config.API_VERSION} starting in {provider.mode} mode",
        extra={"environment": config.ENVIRONMENT},
    )

    # Mount API v1 under /api/v1
    app.include_router(api_v1_router, prefix=config.API_V1_STR)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        provider.shutdown()

    return app


app = create_app()
