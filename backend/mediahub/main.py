"""
FastAPI application entry point.
Sets up the API with lifespan events for database initialization.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from mediahub.config import settings
from mediahub.database import engine, init_db
from mediahub.api.router import api_router
from mediahub.middleware.metrics_middleware import MetricsMiddleware
from mediahub.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: configure logging, create tables
    - Shutdown: release pooled connections
    """
    configure_logging('mediahub-api', settings.log_level)
    
    await init_db()
    
    yield
    
    await engine.dispose()


app = FastAPI(
    title="Mediahub API",
    description="Image ingestion and retrieval",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS", "POST", "PUT"],
    allow_headers=["Authorization", "Content-Type", "X-User-Id"],
)

# Metrics middleware (must be after CORS to track all requests)
app.add_middleware(MetricsMiddleware)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Mediahub API",
        "version": "0.1.0",
        "environment": settings.environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
