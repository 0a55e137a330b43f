# =============================================================================
# core/services/product_mutation_service.py - Admin Product Mutations
# =============================================================================
# Orchestrates create / update / delete of a product together with its
# images:
#
#   upload -> validate -> resize/transcode -> store -> link -> clean up
#
# Image processing and storage happen sequentially, one file at a time.
# Rules:
# - A transcode or upload failure rejects the whole mutation; blobs already
#   uploaded by the same request are removed again.
# - Stale blobs are removed only after the product row has been written.
# - Blob cleanup failures are logged and never fail the request.
# - On delete, blobs are removed before the row so the URL list is not lost.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import (
    CategoryNotFoundError,
    ProductNotFoundError,
    SlugTakenError,
    ValidationFailedError,
)
from core.models.product import ProductForm, UploadedImage
from core.services.category_service import CategoryService
from core.services.image_service import ImageService, OUTPUT_CONTENT_TYPE, OUTPUT_EXTENSION
from core.services.product_service import ProductService
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)


class ProductMutationService:
    """
    Service for admin product mutations.

    Keeps each product row and the set of stored image blobs consistent.
    """

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_references(form: ProductForm, existing: dict[str, Any] | None = None) -> None:
        """
        Validate category and slug before any image is stored.

        Raises:
            ValidationFailedError: If a supplied required field is blank
            CategoryNotFoundError: If category_id doesn't exist (400)
            SlugTakenError: If the slug belongs to another product
        """
        supplied = form.model_fields_set

        for field in ("name", "slug", "category_id"):
            if field in supplied and not getattr(form, field):
                raise ValidationFailedError(f"Field cannot be empty: {field}", field=field)

        if "category_id" in supplied and (existing is None or form.category_id != existing.get("category_id")):
            if not CategoryService.get_category_by_id(form.category_id):
                raise CategoryNotFoundError(form.category_id, status_code=400)

        if "slug" in supplied and (existing is None or form.slug != existing.get("slug")):
            if ProductService.get_product_by_slug(form.slug):
                raise SlugTakenError(form.slug)

    @staticmethod
    def _discard_urls(urls: list[str], reason: str) -> None:
        """Best-effort removal of blobs; failures are only logged."""
        if not urls:
            return
        results = StorageService.remove_urls(urls)
        failed = [name for name, ok in results.items() if not ok]
        if failed:
            logger.error(f"Could not remove {len(failed)} image(s) after {reason}: {failed}")
        else:
            logger.info(f"Removed {len(results)} image(s) after {reason}")

    @staticmethod
    def store_images(images: list[UploadedImage]) -> list[str]:
        """
        Transcode and upload images, returning their public URLs in input order.

        All files are transcoded first so an undecodable file is rejected
        before anything is uploaded. If an upload fails, the files uploaded
        so far are removed and the error is re-raised.

        Raises:
            InvalidImageError: If a file is not a decodable image
            StorageUploadError: If an upload fails
        """
        processed = [
            ImageService.process_image(image.content, filename=image.filename)
            for image in images
        ]

        urls: list[str] = []
        try:
            for data in processed:
                name = StorageService.generate_object_name(OUTPUT_EXTENSION)
                urls.append(StorageService.put(name, data, OUTPUT_CONTENT_TYPE))
        except Exception:
            ProductMutationService._discard_urls(urls, "failed upload")
            raise

        return urls

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @staticmethod
    def create_product(form: ProductForm, images: list[UploadedImage]) -> dict[str, Any]:
        """
        Create a product with its images.

        Args:
            form: Parsed admin form
            images: Uploaded image files, in display order

        Returns:
            Created product row

        Raises:
            ValidationFailedError: If name, slug or category_id is missing
            CategoryNotFoundError / SlugTakenError: If references are invalid
            InvalidImageError / StorageUploadError: If an image can't be stored
        """
        form.validate_for_create()
        ProductMutationService._check_references(form)

        record = form.to_record()
        urls = ProductMutationService.store_images(images)
        record["images"] = urls

        try:
            product = ProductService.create_product(record)
        except Exception:
            ProductMutationService._discard_urls(urls, "failed product insert")
            raise

        logger.info(f"Product {product['id']} created with {len(urls)} image(s)")
        return product

    @staticmethod
    def update_product(
        product_id: str | UUID,
        form: ProductForm,
        images: list[UploadedImage],
    ) -> dict[str, Any]:
        """
        Update a product and, when new images are sent, replace its images.

        Without new files the stored images are kept untouched, unless the
        form sets clear_images, which empties the list. Replaced blobs are
        deleted after the row is written; failures there are only logged.

        Returns:
            Updated product row

        Raises:
            ProductNotFoundError: If the product doesn't exist
            ValidationFailedError / CategoryNotFoundError / SlugTakenError:
                If the form is invalid
            InvalidImageError / StorageUploadError: If an image can't be stored
        """
        product_id_str = str(product_id)
        existing = ProductService.get_product_by_id(product_id_str)
        if not existing:
            raise ProductNotFoundError(product_id_str)

        ProductMutationService._check_references(form, existing)

        record = form.to_record(existing)
        old_urls: list[str] = existing.get("images") or []
        replace_images = bool(images) or form.clear_images

        new_urls: list[str] = []
        if images:
            new_urls = ProductMutationService.store_images(images)
        if replace_images:
            record["images"] = new_urls

        try:
            product = ProductService.update_product(product_id_str, record)
        except Exception:
            ProductMutationService._discard_urls(new_urls, "failed product update")
            raise

        if product is None:
            # Row vanished between read and write
            ProductMutationService._discard_urls(new_urls, "update of missing product")
            raise ProductNotFoundError(product_id_str)

        if replace_images and old_urls:
            kept = set(new_urls)
            stale = [url for url in old_urls if url not in kept]
            ProductMutationService._discard_urls(stale, f"image replacement on {product_id_str}")

        logger.info(
            f"Product {product_id_str} updated"
            + (f", images replaced ({len(old_urls)} -> {len(new_urls)})" if replace_images else "")
        )
        return product

    @staticmethod
    def delete_product(product_id: str | UUID) -> dict[str, Any]:
        """
        Delete a product: its blobs first (best-effort), then its row.

        Returns:
            The deleted product row (as it was before deletion)

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        product_id_str = str(product_id)
        existing = ProductService.get_product_by_id(product_id_str)
        if not existing:
            raise ProductNotFoundError(product_id_str)

        ProductMutationService._discard_urls(
            existing.get("images") or [],
            f"deletion of product {product_id_str}",
        )

        ProductService.delete_product(product_id_str)
        logger.info(f"Product {product_id_str} deleted")
        return existing
