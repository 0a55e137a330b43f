# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared request handling.
# These are injected into route handlers using Depends().
# =============================================================================

import logging
from typing import Annotated, NamedTuple

from fastapi import Depends, Request
from starlette.datastructures import UploadFile

from app.config import settings
from app.exceptions import FileTooLargeError, TooManyImagesError
from core.models.product import ProductForm, UploadedImage

logger = logging.getLogger(__name__)

# ProductForm argument -> accepted multipart keys (client camelCase first)
PRODUCT_FORM_KEYS: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "slug": ("slug",),
    "description": ("description",),
    "category_id": ("categoryId", "category_id"),
    "price": ("price",),
    "price_on_request": ("priceOnRequest", "price_on_request"),
    "is_active": ("isActive", "is_active"),
    "specifications": ("specifications",),
    "clear_images": ("clearImages", "clear_images"),
}

IMAGES_FIELD = "images"


class ProductSubmission(NamedTuple):
    """Parsed admin product form plus its uploaded images."""
    form: ProductForm
    images: list[UploadedImage]


async def _read_images(uploads: list[UploadFile]) -> list[UploadedImage]:
    """Read uploaded files into memory, enforcing count and size limits."""
    # Browsers send an empty part when no file was chosen
    uploads = [upload for upload in uploads if upload.filename]

    if len(uploads) > settings.MAX_PRODUCT_IMAGES:
        raise TooManyImagesError(len(uploads), settings.MAX_PRODUCT_IMAGES)

    images: list[UploadedImage] = []
    for upload in uploads:
        content = await upload.read()
        if len(content) > settings.max_upload_size_bytes:
            raise FileTooLargeError(
                upload.filename,
                len(content) / (1024 * 1024),
                settings.MAX_UPLOAD_SIZE_MB,
            )
        images.append(UploadedImage(
            filename=upload.filename,
            content=content,
            content_type=upload.content_type,
        ))
    return images


async def get_product_submission(request: Request) -> ProductSubmission:
    """
    Parse the multipart product form.

    The form is read directly so an empty `price` can be told apart from a
    missing one (empty clears the price, missing leaves it unchanged).

    Raises:
        ValidationFailedError / InvalidSpecificationsError: Bad field values
        TooManyImagesError / FileTooLargeError: Upload limits exceeded
    """
    async with request.form() as form:
        fields: dict[str, str | None] = {}
        for argument, keys in PRODUCT_FORM_KEYS.items():
            value = next((form[key] for key in keys if key in form), None)
            fields[argument] = value if isinstance(value, str) else None

        uploads = [item for item in form.getlist(IMAGES_FIELD) if isinstance(item, UploadFile)]
        images = await _read_images(uploads)

    product_form = ProductForm.from_form_fields(**fields)
    logger.debug(
        f"Product form fields={sorted(product_form.model_fields_set)} images={len(images)}"
    )
    return ProductSubmission(form=product_form, images=images)


# Type alias for dependency injection
ProductSubmissionDep = Annotated[ProductSubmission, Depends(get_product_submission)]
