"""FastAPI server for the Property Portal.

Main entry point for the API server.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.routes import (
    health,
    auth,
    dashboard,
    service_requests,
    work_orders,
    invoices,
    properties,
    tenants,
    documents,
    notifications,
)
from api.services.store import get_store
from core import __version__
from core.config import get_settings
from core.observability import configure_logging, get_logger, get_metrics, with_correlation

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    settings = get_settings()
    configure_logging(
        level=getattr(logging, settings.log_level, logging.INFO),
        json_format=settings.log_json,
    )
    store = get_store()
    logger.info(
        "Property Portal API starting up...",
        extra_fields={"env": settings.env, "users": len(store.list_users())},
    )

    yield

    # Shutdown
    logger.info("Property Portal API shutting down...")


async def correlate_request(request: Request, call_next):
    """Tag every request with an ID and record how long it took."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    started = time.perf_counter()

    with with_correlation(request_id=request_id):
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        get_metrics().record_request_time(f"{request.method} {request.url.path}", duration_ms)
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra_fields={"duration_ms": round(duration_ms, 2)},
        )

    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title="Property Portal API",
        description="Role-specific dashboards and service-request workflow for property managers, tenants and service providers",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(correlate_request)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix="/api", tags=["Authentication"])
    app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
    app.include_router(service_requests.router, prefix="/service-requests", tags=["Service Requests"])
    app.include_router(work_orders.router, prefix="/work-orders", tags=["Work Orders"])
    app.include_router(invoices.router, prefix="/invoices", tags=["Invoices"])
    app.include_router(properties.router, prefix="/properties", tags=["Properties"])
    app.include_router(tenants.router, prefix="/tenants", tags=["Tenants"])
    app.include_router(documents.router, prefix="/documents", tags=["Documents"])
    app.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])

    return app


# Default app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.server:app", host="0.0.0.0", port=8000, reload=True)
