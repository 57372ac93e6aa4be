"""Evidence Integrity - FastAPI Application
Transport for evidence collection, verification and video comparison.
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.errors import error_response, register_error_handlers
from api.middleware import (
    RequestLoggingMiddleware,
    RequestTimeoutMiddleware,
    SecurityHeadersMiddleware,
)
from core.config import api_settings, db_settings, integrity_settings
from core.database.session import close_db, init_db_async, test_connection, wait_for_database
from core.logging import configure_logging, get_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger = configure_logging(
        log_dir=os.getenv("LOG_DIR", "./logs"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        json_format=True,
    )

    env = os.getenv("EVIDENCE_INTEGRITY_ENV", "development")
    logger.info("Starting Evidence Integrity API...", environment=env)

    db_available = await wait_for_database(
        max_wait=float(os.getenv("DB_STARTUP_TIMEOUT", "60")),
        interval=2.0,
    )
    if not db_available:
        if env == "production":
            raise RuntimeError("Database not available - cannot start in production mode")
        logger.warning("Database not available - requests will fail until it is")
    else:
        await init_db_async()
        logger.info("Database tables initialized")

    app.state.ready = True
    logger.info("Evidence Integrity API ready", hash_algorithm=integrity_settings.hash_algorithm)

    yield

    app.state.ready = False
    await close_db()
    logger.info("Evidence Integrity API shutdown complete")


app = FastAPI(
    title=api_settings.title,
    version=api_settings.version,
    description=api_settings.description,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=api_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Executed in reverse order of registration
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=30)
app.add_middleware(RequestLoggingMiddleware)

register_error_handlers(app)


from api.routes import comparisons_router, evidence_router  # noqa: E402


app.include_router(evidence_router, prefix="/api/v1")
app.include_router(comparisons_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": api_settings.title,
        "version": api_settings.version,
        "status": "operational",
        "hash_algorithm": integrity_settings.hash_algorithm,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with database status."""
    connected = await test_connection()
    return {
        "status": "healthy" if connected else "degraded",
        "database": {"host": db_settings.host, "status": "connected" if connected else "error"},
    }


@app.get("/ready")
async def readiness_check():
    """Kubernetes-style readiness probe."""
    if not getattr(app.state, "ready", False):
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "message": "Application is not ready"},
        )
    if not await test_connection():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "message": "Database not connected"},
        )
    return {"status": "ready"}


@app.get("/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"status": "alive"}


@app.get("/metrics")
async def get_metrics_json():
    """Get application metrics as JSON."""
    return get_logger().get_metrics()


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    get_logger().error(
        f"Unhandled exception: {exc!s}",
        path=request.url.path,
        method=request.method,
    )
    return error_response("internal", "Internal server error", {"type": type(exc).__name__}, 500)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=api_settings.host,
        port=api_settings.port,
        reload=True,
    )
