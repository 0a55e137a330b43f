# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Catalog API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
#   poetry run python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import CatalogException, catalog_exception_handler
from app.routers import (
    admin_products,
    admin_quotations,
    categories,
    health,
    products,
    quotations,
)
from app.auth import routes as auth_routes
from core.services.category_service import CategoryService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: seed the default categories if the table is empty. A failure
    here is logged and the API still starts.
    """
    logger.info(f"Starting Catalog API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    try:
        created = CategoryService.ensure_default_categories()
        if created:
            logger.info(f"Initialized {created} default categories")
    except Exception as e:
        logger.error(f"Error initializing categories: {e}")

    yield

    logger.info("Shutting down Catalog API")


# Create FastAPI application
app = FastAPI(
    title="Catalog API",
    description="""
## Business Catalog API

Public browsing of categories and products, a quotation request form, and
an admin back office for products and quotation messages.

### Admin Access

1. **Sign in** - `POST /api/admin/login` with `{"username": <email>, "password": ...}`
2. **Use the token** - send `Authorization: Bearer <token>` on every `/api/admin/*` call

### Product Images

Images sent to `POST /api/admin/products` and `PUT /api/admin/products/{id}` are
resized to fit 800x600 (never enlarged), converted to WEBP and stored in object
storage. Replaced images are deleted.
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Categories",
            "description": "Browse product categories",
        },
        {
            "name": "Products",
            "description": "Browse active products",
        },
        {
            "name": "Quotations",
            "description": "Submit quotation requests",
        },
        {
            "name": "Admin Auth",
            "description": "Admin sign-in and token verification",
        },
        {
            "name": "Admin Products",
            "description": "Create, update and delete products with images",
        },
        {
            "name": "Admin Quotations",
            "description": "Review quotation requests and update their status",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CatalogException)
async def handle_catalog_exception(request: Request, exc: CatalogException):
    """Handle custom Catalog exceptions."""
    return await catalog_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Public catalog endpoints
app.include_router(
    categories.router,
    prefix="/api/categories",
    tags=["Categories"]
)

app.include_router(
    products.router,
    prefix="/api/products",
    tags=["Products"]
)

app.include_router(
    quotations.router,
    prefix="/api/quotations",
    tags=["Quotations"]
)

# Admin sign-in (login is public, verify requires a token)
app.include_router(
    auth_routes.router,
    prefix="/api/admin",
    tags=["Admin Auth"]
)

# Admin endpoints (every route requires the admin role)
app.include_router(
    admin_products.router,
    prefix="/api/admin/products",
    tags=["Admin Products"]
)

app.include_router(
    admin_quotations.router,
    prefix="/api/admin/quotations",
    tags=["Admin Quotations"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Catalog API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
