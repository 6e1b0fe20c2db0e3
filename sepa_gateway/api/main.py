"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from sepa_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from sepa_gateway.api.v1 import sepa, history
from sepa_gateway.infrastructure.observability.logging import setup_logging
from sepa_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="SEPA Gateway",
        description="Monthly member debt export as SEPA Direct Debit (pain.008) and CSV",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(sepa.router, prefix="/v1", tags=["sepa"])
    app.include_router(history.router, prefix="/v1", tags=["history"])

    return app


app = create_app()
