"""Application entry point.

This module builds the public FastAPI application: routers under ``BASE_PATH``,
exception handlers, middleware and Prometheus instrumentation.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from recipe_manager.api.v1.routes import api_router
from recipe_manager.core.config.config import get_settings
from recipe_manager.core.logging import get_logger
from recipe_manager.db.seed import seed_development_data
from recipe_manager.db.session import SessionLocal, engine
from recipe_manager.exceptions.handlers import register_exception_handlers
from recipe_manager.middleware.request_id_middleware import RequestIDMiddleware
from recipe_manager.middleware.response_headers_middleware import (
    ResponseHeadersMiddleware,
)

_log = get_logger(__name__)
settings = get_settings()

DOCS_PATH = f"{settings.base_path}/api-docs"

# Rate limiter setup
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_per_minute}/minute"],
    enabled=settings.enable_rate_limiting,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan management.

    Args:
        app: FastAPI application instance

    Yields:
        None during application lifecycle
    """
    _log.info("Starting Recipe Manager Service ({})", settings.APP_ENV)
    if settings.is_development:
        db = SessionLocal()
        try:
            seed_development_data(engine, db)
        finally:
            db.close()

    yield

    _log.info("Shutting down Recipe Manager Service")
    engine.dispose()


app = FastAPI(
    title="Recipe Manager Service",
    version="1.0.0",
    description="Manage recipes with their sections, ingredients, tags and pictures.",
    openapi_version="3.1.0",
    docs_url=DOCS_PATH if settings.is_development else None,
    redoc_url=None,
    openapi_url=f"{DOCS_PATH}/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)

# Prometheus instrumentation (must be done before middleware setup)
instrumentator = Instrumentator()
instrumentator.instrument(app).expose(app, include_in_schema=False)

register_exception_handlers(app)

# Middleware stack (order matters!)
app.add_middleware(ResponseHeadersMiddleware, docs_prefix=DOCS_PATH)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["OPTIONS", "GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestIDMiddleware)

# Rate limiting
app.state.limiter = limiter

# Routes
app.include_router(api_router, prefix=settings.base_path)
