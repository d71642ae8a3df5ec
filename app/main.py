"""
Task Tracker API Server

Entry point for the FastAPI application.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory, init_db, ping
from app.core.errors import register_error_handlers
from app.core.logging_setup import configure_logging

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    if settings.create_schema_on_startup:
        await init_db(engine)
        log.info("database.schema_created")
    log.info("app.startup", pool_size=settings.db_pool_size)
    try:
        yield
    finally:
        log.info("app.shutdown")
        await engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Task Tracker",
        description="Task records with status-aware completion timestamps.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check():
        """Readiness check: the database answers a trivial query."""
        try:
            await ping(app.state.engine)
        except Exception as exc:
            log.warning("app.not_ready", error=str(exc))
            return JSONResponse(status_code=503, content={"message": "Database unavailable"})
        return {"status": "ready"}

    return app


app = create_app()


def run() -> None:
    """CLI entry point: serve the app with uvicorn."""
    settings = get_settings()
    log.info("app.listening", base_url=f"http://localhost:{settings.port}")
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
