"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_service.api.errors import register_exception_handlers
from credit_service.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_service.api.v1 import credits, reporting, transactions
from credit_service.infrastructure.observability.logging import setup_logging
from credit_service.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Service",
        description="Credit account lifecycle, transaction settlement and balance reporting",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers; transactions first so /credits/transactions
    # is not captured by /credits/{credit_id}
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(credits.router, prefix="/v1", tags=["credits"])
    app.include_router(reporting.router, prefix="/v1", tags=["reporting"])

    return app


app = create_app()
