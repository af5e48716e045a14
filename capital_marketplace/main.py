# capital_marketplace/main.py
"""
Capital Marketplace - Main FastAPI Application

Backend for founders raising capital:
- Company onboarding
- Mock KYC verification and bank linking
- Data room document uploads
- Investability score and recommendations
- In-app notifications and audit trail
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from capital_marketplace.config import Settings, get_settings
from capital_marketplace.core.database import Database
from capital_marketplace.core.logger import configure_logging, get_logger
from capital_marketplace.middleware import (
    RateLimitMiddleware,
    add_request_id_middleware,
    register_error_handlers,
)
from capital_marketplace.routes import include_routes
from capital_marketplace.services.file_storage import LocalFileStorage

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration (default: loaded from environment / .env)
        database: Database handle (default: built from settings.database_url)
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    database = database or Database(settings.database_url, echo=settings.debug)

    app = FastAPI(
        title=settings.api_title,
        description="Investability scoring backend for startup fundraising",
        version=settings.api_version,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.file_storage = LocalFileStorage(settings.upload_dir)
    # Called with (company_id, score) after every score recomputation
    app.state.score_change_handlers = []

    # ==================== MIDDLEWARE SETUP ====================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=settings.rate_limit_max,
            window_seconds=settings.rate_limit_window_seconds,
        )

    app.middleware("http")(add_request_id_middleware)

    # ==================== ERROR HANDLERS ====================

    register_error_handlers(app)

    # ==================== ROUTE REGISTRATION ====================

    include_routes(app)

    # ==================== STARTUP/SHUTDOWN ====================

    @app.on_event("startup")
    async def startup_event():
        """Create tables and the upload directory"""
        logger.info("🚀 Starting up Capital Marketplace API...")

        if not database.health_check():
            logger.error("❌ Failed to connect to database on startup!")
            raise RuntimeError("Database connection failed")

        database.create_all()
        app.state.file_storage.ensure_root()

        logger.info(f"✅ Capital Marketplace API started ({settings.environment})")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("🛑 Shutting down Capital Marketplace API...")
        database.dispose()

    return app


app = create_app()


def main():
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "capital_marketplace.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
