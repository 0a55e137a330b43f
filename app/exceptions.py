# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and, where possible, a suggestion
# telling the caller how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class CatalogException(Exception):
    """
    Base exception for the Catalog API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CATALOG_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationFailedError(CatalogException):
    """Raised when a request is missing fields or has malformed values."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_FAILED",
            status_code=400,
            suggestion="Check the submitted form fields and try again",
            details={"field": field} if field else None,
        )


class InvalidSpecificationsError(CatalogException):
    """Raised when the specifications field is not valid JSON key/value text."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Invalid specifications: {error}",
            code="INVALID_SPECIFICATIONS",
            status_code=400,
            suggestion='Send a JSON object of strings, e.g. {"Material": "Cotton"}',
            details={"error": error},
        )


class SlugTakenError(CatalogException):
    """Raised when a product slug is already used by another product."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"Slug already in use: {slug}",
            code="SLUG_TAKEN",
            status_code=400,
            suggestion="Choose a different slug for this product",
            details={"slug": slug},
        )


# =============================================================================
# Not Found Exceptions
# =============================================================================

class CategoryNotFoundError(CatalogException):
    """Raised when a category slug or ID doesn't exist."""

    def __init__(self, identifier: str, status_code: int = 404):
        super().__init__(
            message=f"Category not found: {identifier}",
            code="CATEGORY_NOT_FOUND",
            status_code=status_code,
            suggestion="List categories with GET /api/categories",
            details={"category": identifier},
        )


class ProductNotFoundError(CatalogException):
    """Raised when a product slug or ID doesn't exist."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Product not found: {identifier}",
            code="PRODUCT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the product exists and is active",
            details={"product": identifier},
        )


class QuotationNotFoundError(CatalogException):
    """Raised when a quotation ID doesn't exist."""

    def __init__(self, quotation_id: str):
        super().__init__(
            message=f"Quotation not found: {quotation_id}",
            code="QUOTATION_NOT_FOUND",
            status_code=404,
            details={"quotation_id": quotation_id},
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidImageError(CatalogException):
    """Raised when an uploaded file cannot be decoded as an image."""

    def __init__(self, filename: str | None, error: str):
        super().__init__(
            message=f"Invalid image: {filename or 'upload'}",
            code="INVALID_IMAGE",
            status_code=400,
            suggestion="Upload JPEG, PNG, WEBP or GIF images",
            details={"filename": filename, "error": error},
        )


class TooManyImagesError(CatalogException):
    """Raised when a product form carries more images than allowed."""

    def __init__(self, count: int, max_count: int):
        super().__init__(
            message=f"Too many images: {count} (max: {max_count})",
            code="TOO_MANY_IMAGES",
            status_code=400,
            suggestion=f"Upload at most {max_count} images per request",
            details={"count": count, "max_count": max_count},
        )


class FileTooLargeError(CatalogException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, filename: str | None, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"filename": filename, "size_mb": size_mb, "max_mb": max_mb},
        )


class StorageUploadError(CatalogException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str, code: str = "STORAGE_UPLOAD_ERROR"):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code=code,
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error},
        )


class ObjectExistsError(StorageUploadError):
    """Raised when an upload targets an object name that already exists."""

    def __init__(self, name: str):
        super().__init__(f"object already exists: {name}", code="OBJECT_EXISTS")
        self.details["name"] = name


# =============================================================================
# Exception Handlers
# =============================================================================

async def catalog_exception_handler(
    request: Request,
    exc: CatalogException
) -> JSONResponse:
    """
    Convert CatalogException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
