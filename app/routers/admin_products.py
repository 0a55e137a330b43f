# =============================================================================
# app/routers/admin_products.py - Admin Product Management
# =============================================================================
# Create, update and delete products together with their images.
# Every endpoint requires an admin bearer token.
#
# Create / update take a multipart form:
#   name, slug, description, categoryId, price, priceOnRequest, isActive,
#   specifications (JSON text), clearImages, and up to 10 `images` files.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel

from app.auth import require_admin
from app.dependencies import ProductSubmissionDep
from app.exceptions import ProductNotFoundError
from core.models.product import Product
from core.services.product_mutation_service import ProductMutationService
from core.services.product_service import ProductService

router = APIRouter(dependencies=[Depends(require_admin)])


class ProductDeleteResponse(BaseModel):
    """Response when deleting a product."""
    id: str
    message: str = "Product deleted successfully"


@router.get("", response_model=list[Product])
async def list_all_products(
    category_id: Annotated[UUID | None, Query(alias="categoryId")] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
):
    """List all products, including inactive ones, newest first."""
    return ProductService.list_products(
        category_id=category_id,
        search=search,
        include_inactive=True,
    )


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: Annotated[UUID, Path(description="Product UUID")],
):
    """Get any product (active or not) by ID."""
    product = ProductService.get_product_by_id(product_id)
    if not product:
        raise ProductNotFoundError(str(product_id))
    return product


@router.post("", response_model=Product)
async def create_product(submission: ProductSubmissionDep):
    """
    Create a product.

    Each image is resized to fit 800x600, converted to WEBP and uploaded;
    the product stores the public URLs in upload order. If any image
    fails, nothing is created.
    """
    return ProductMutationService.create_product(submission.form, submission.images)


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    submission: ProductSubmissionDep,
):
    """
    Update a product.

    Sending images replaces the whole image list and deletes the old
    files. Sending none keeps the current images (unless clearImages=true).
    """
    return ProductMutationService.update_product(product_id, submission.form, submission.images)


@router.delete("/{product_id}", response_model=ProductDeleteResponse)
async def delete_product(
    product_id: Annotated[UUID, Path(description="Product UUID")],
):
    """Delete a product and its stored images."""
    ProductMutationService.delete_product(product_id)
    return ProductDeleteResponse(id=str(product_id))
