"""
Storefront orders service
Order placement with stock adjustment, order queries, admin order handling
and payment verification.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import subprocess
import os

from shared.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from storefront.api.admin_routes import router as admin_router
from storefront.api.error_handlers import register_exception_handlers
from storefront.api.order_routes import router as order_router
from storefront.api.payment_routes import router as payment_router
from storefront.api.product_routes import router as product_router
from storefront.core_settings import get_settings
from storefront.infrastructure.db import engine, init_models

SERVICE_NAME = "storefront-orders"
SERVICE_DESCRIPTION = "Order placement, stock adjustment and order management"
PROJECT_ROOT = os.path.join(os.path.dirname(__file__), "..")

settings = get_settings()
SERVICE_VERSION = settings.SERVICE_VERSION

setup_logging(service_name=SERVICE_NAME, level=settings.LOG_LEVEL, version=SERVICE_VERSION)

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    if settings.RUN_MIGRATIONS:
        logger.info("Running database migrations")
        result = subprocess.run(
            ["alembic", "upgrade", "head"],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            check=False
        )
        if result.returncode != 0:
            logger.warning(f"Migration output: {result.stderr}")
        else:
            logger.info("Database migrations completed")

    try:
        init_models()
        logger.info("Database models initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database models: {e}")
        raise

    logger.info(f"{SERVICE_NAME} started successfully")
    yield
    logger.info(f"Shutting down {SERVICE_NAME}")

app = FastAPI(
    title=SERVICE_NAME,
    description=SERVICE_DESCRIPTION,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

health_service = ServiceHealth(
    SERVICE_NAME, SERVICE_VERSION, engine,
    required_tables=("products", "product_sizes", "orders", "order_items", "order_counters", "users"),
)
app.include_router(health_service.create_health_router())

app.include_router(order_router)
app.include_router(admin_router)
app.include_router(product_router)
app.include_router(payment_router)

@app.get("/")
async def root():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/api/docs"
    }

@app.get("/info")
async def info():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "health": "/health",
            "ready": "/health/ready",
            "live": "/health/live",
            "metrics": "/metrics",
            "docs": "/api/docs"
        }
    }
