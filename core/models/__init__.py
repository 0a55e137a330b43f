# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - category.py: Category schemas and the default category seed list
# - product.py: Product schemas, admin form parsing, specifications
# - quotation.py: Quotation request/response and status schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .category import (
    DEFAULT_CATEGORIES,
    Category,
    CategoryCreate,
)

from .product import (
    Product,
    ProductForm,
    SpecificationEntry,
    UploadedImage,
    parse_specifications,
    specifications_from_data,
    specifications_to_record,
)

from .quotation import (
    Quotation,
    QuotationCreate,
    QuotationCreateResponse,
    QuotationStatus,
    QuotationStatusUpdate,
    UserType,
)

__all__ = [
    # Category
    "DEFAULT_CATEGORIES",
    "Category",
    "CategoryCreate",
    # Product
    "Product",
    "ProductForm",
    "SpecificationEntry",
    "UploadedImage",
    "parse_specifications",
    "specifications_from_data",
    "specifications_to_record",
    # Quotation
    "Quotation",
    "QuotationCreate",
    "QuotationCreateResponse",
    "QuotationStatus",
    "QuotationStatusUpdate",
    "UserType",
]
