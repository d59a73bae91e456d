"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from talentlink.api.limiter import limiter
from talentlink.api.routes import accounts, applications, debug, jobs
from talentlink.config import settings
from talentlink.db import StoreRegistry
from talentlink.errors import TalentLinkError
from talentlink.log import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, dispose engines on shutdown."""
    registry: StoreRegistry = app.state.registry
    try:
        registry.init_db()
    except ValueError:
        logger.warning("DATABASE_URL not set, skipping table creation")
    yield
    registry.dispose()


async def talentlink_error_handler(request: Request, exc: TalentLinkError):
    """Map workflow and store errors to their status code."""
    if exc.status_code >= 500:
        # Route template, not the URL: log-in carries the password in its path
        route = request.scope.get("route")
        path = getattr(route, "path", "<unrouted>")
        logger.error("%s %s failed: %s", request.method, path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed request bodies are a 400, not FastAPI's 422."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Request body must contain a valid document",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"error": f"Rate limit exceeded: {exc.detail}"},
    )


def create_app(registry: StoreRegistry | None = None) -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="TalentLink API",
        description="Job board backend: accounts, job postings and applications",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.registry = registry or StoreRegistry.from_settings(settings)
    app.state.limiter = limiter

    app.add_exception_handler(TalentLinkError, talentlink_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(accounts.router, tags=["Accounts"])
    app.include_router(applications.router, tags=["Applications"])
    app.include_router(jobs.router, tags=["Jobs"])
    if settings.enable_debug_routes:
        app.include_router(debug.router, tags=["Debug"])

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
