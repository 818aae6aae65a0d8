"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from catalog_financing.api.middleware import RequestIDMiddleware, MetricsMiddleware
from catalog_financing.api.v1 import offers, quote, home
from catalog_financing.infrastructure.observability.logging import setup_logging
from catalog_financing.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Catalog Financing Service",
        description="Financing plan resolution and installment pricing for the catalog storefront",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(offers.router, prefix="/v1", tags=["offers"])
    app.include_router(quote.router, prefix="/v1", tags=["quotes"])
    app.include_router(home.router, prefix="/v1", tags=["home"])

    return app


app = create_app()
