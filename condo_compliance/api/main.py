"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from condo_compliance.api.middleware import RequestIDMiddleware, MetricsMiddleware
from condo_compliance.api.v1 import compliance, ledger
from condo_compliance.domain.obligations import build_registry
from condo_compliance.infrastructure.observability.logging import setup_logging
from condo_compliance.config import Settings, settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app(config: Settings = settings) -> FastAPI:
    """
    Create and configure FastAPI application.

    The obligation registry is built here so that configuration errors stop
    the service at startup instead of surfacing per request.
    """
    app = FastAPI(
        title="Condo Compliance Service",
        description="Recurring obligation status per unit and month",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.registry = build_registry(config)
    app.state.units = list(config.units)
    app.state.compliance_roles = list(config.compliance_roles)
    app.state.timezone = config.timezone

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": config.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(compliance.router, prefix="/v1", tags=["compliance"])
    app.include_router(ledger.router, prefix="/v1", tags=["ledger"])

    return app


app = create_app()
