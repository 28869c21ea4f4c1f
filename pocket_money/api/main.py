"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from pocket_money.api.middleware import RequestIDMiddleware, MetricsMiddleware
from pocket_money.api.v1 import budget, day, deductions, history
from pocket_money.infrastructure.database.session import init_db
from pocket_money.infrastructure.observability.logging import setup_logging
from pocket_money.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Pocket Money",
        description="Daily spending limit and end-of-day settlement service",
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
    app.include_router(budget.router, prefix="/v1", tags=["budget"])
    app.include_router(day.router, prefix="/v1", tags=["day"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(deductions.router, prefix="/v1", tags=["deductions"])

    return app


init_db()
app = create_app()
