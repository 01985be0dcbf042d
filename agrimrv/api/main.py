"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from agrimrv.api.middleware import RequestIDMiddleware, MetricsMiddleware
from agrimrv.api.v1 import score, history, estimate
from agrimrv.infrastructure.database.session import init_db
from agrimrv.infrastructure.observability.logging import setup_logging
from agrimrv.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="AgriMRV Scoring Service",
        description="Carbon-credit scoring for smallholder farm declarations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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
    app.include_router(score.router, prefix="/v1", tags=["scoring"])
    app.include_router(history.router, prefix="/v1", tags=["profiles"])
    app.include_router(estimate.router, prefix="/v1", tags=["calculators"])

    return app


app = create_app()
