# =============================================================================
# app/routers/categories.py - Public Category Endpoints
# =============================================================================
# Category listing, lookup by slug, and the active products of a category.
# No authentication required.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.exceptions import CategoryNotFoundError
from core.models.category import Category
from core.models.product import Product
from core.services.category_service import CategoryService
from core.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=list[Category])
async def list_categories():
    """List all categories, ordered by name."""
    return CategoryService.list_categories()


@router.get("/{slug}", response_model=Category)
async def get_category(
    slug: Annotated[str, Path(description="Category slug, e.g. 'fabric'")],
):
    """Get one category by its slug."""
    category = CategoryService.get_category_by_slug(slug)
    if not category:
        raise CategoryNotFoundError(slug)
    return category


@router.get("/{category_id}/products", response_model=list[Product])
async def list_category_products(
    category_id: Annotated[UUID, Path(description="Category UUID")],
):
    """List the active products of a category, newest first."""
    return ProductService.list_products_by_category(category_id)
