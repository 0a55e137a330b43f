# =============================================================================
# app/routers/products.py - Public Product Endpoints
# =============================================================================
# Browsing the catalog. Only active products are ever returned here.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.exceptions import ProductNotFoundError
from core.models.product import Product
from core.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=list[Product])
async def list_products(
    category_id: Annotated[UUID | None, Query(alias="categoryId", description="Filter by category ID")] = None,
    search: Annotated[str | None, Query(max_length=100, description="Substring of the product name")] = None,
):
    """
    List active products, newest first.

    Optional filters: `categoryId` and `search` (name substring).
    """
    return ProductService.list_products(category_id=category_id, search=search)


@router.get("/{slug}", response_model=Product)
async def get_product(
    slug: Annotated[str, Path(description="Product slug")],
):
    """Get an active product by its slug."""
    product = ProductService.get_product_by_slug(slug)
    if not product or not product.get("is_active", True):
        raise ProductNotFoundError(slug)
    return product
