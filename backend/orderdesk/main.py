"""
OrderDesk - Backend API
Customers, products and order transactions over PostgreSQL

Run:
    uvicorn orderdesk.main:create_app --factory --host 0.0.0.0 --port 8000
"""
import logging
import time
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orderdesk.api import operations
from orderdesk.core.config import Settings
from orderdesk.core.database import get_db_connection, execute_statement
from orderdesk.core.exceptions import DataAccessError
from orderdesk.core.logging import setup_logging

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).parent.parent


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application

    Settings and the DatabaseConfig are resolved once here and kept on
    app.state; request handlers receive them through dependencies.
    """
    if settings is None:
        # Load environment variables
        load_dotenv(BACKEND_DIR / '.env')
        settings = Settings()

    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    db_config = settings.get_database_config()

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        description=settings.API_DESCRIPTION,
    )
    app.state.settings = settings
    app.state.db_config = db_config

    allowed_origins = settings.get_allowed_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials="*" not in allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Same operations at the root (original paths) and under /api/v1
    app.include_router(operations.router, tags=["Operations"])
    app.include_router(operations.router, prefix="/api/v1", tags=["Operations"])

    @app.get("/")
    def root():
        """Service identity"""
        return {
            "message": "OrderDesk API",
            "status": "online",
            "version": settings.API_VERSION,
        }

    @app.get("/health")
    def health():
        """Health check endpoint - tests database connectivity"""
        start_time = time.time()

        db_status = "unknown"
        db_latency_ms = None
        db_error = None

        try:
            with get_db_connection(db_config) as conn:
                with conn.cursor() as cursor:
                    db_start = time.time()
                    execute_statement(cursor, "SELECT 1")
                    db_latency_ms = round((time.time() - db_start) * 1000, 2)
            db_status = "connected"
        except DataAccessError as e:
            logger.warning(f"Health check could not reach the database: {e}")
            db_status = "disconnected"
            db_error = str(e)

        return {
            "status": "healthy" if db_status == "connected" else "degraded",
            "service": "orderdesk-api",
            "version": settings.API_VERSION,
            "database": {
                "status": db_status,
                "latency_ms": db_latency_ms,
                "error": db_error,
                "connection_timeout_s": db_config.connect_timeout,
            },
            "total_latency_ms": round((time.time() - start_time) * 1000, 2),
        }

    logger.info(f"{settings.API_TITLE} {settings.API_VERSION} configured for database "
                f"{db_config.dbname} at {db_config.host}:{db_config.port}")
    return app


if __name__ == "__main__":
    import uvicorn

    load_dotenv(BACKEND_DIR / '.env')
    _settings = Settings()
    uvicorn.run(create_app(_settings), host=_settings.API_HOST, port=_settings.API_PORT)
